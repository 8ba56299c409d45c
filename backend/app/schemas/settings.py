"""
Schémas Pydantic pour la configuration SMTP (écran Paramètres).
"""

from typing import Optional

from pydantic import BaseModel, field_validator

from app.config import settings as app_settings


class SmtpSettings(BaseModel):
    """Configuration SMTP complète, chargée une fois par opération d'envoi."""
    email: str
    password: str
    from_name: str = app_settings.SMTP_DEFAULT_FROM_NAME
    host: str = app_settings.SMTP_DEFAULT_HOST
    port: int = app_settings.SMTP_DEFAULT_PORT

    @field_validator("port")
    @classmethod
    def valid_port(cls, v: int) -> int:
        if not 0 < v < 65536:
            raise ValueError("Le port SMTP doit être compris entre 1 et 65535.")
        return v


class SmtpSettingsResponse(BaseModel):
    """Configuration renvoyée à l'écran Paramètres (sans le mot de passe)."""
    email: str
    from_name: str
    host: str
    port: int
    has_password: bool
    configured: bool


class SmtpTestResult(BaseModel):
    success: bool
    error: Optional[str] = None
