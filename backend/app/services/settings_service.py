"""
Paramètres clé/valeur de l'application, dont la configuration SMTP.

La configuration SMTP est relue depuis la base à chaque opération d'envoi
et transmise explicitement au service d'envoi (pas d'état global).
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.config import settings as app_settings
from app.models.setting import Setting
from app.schemas.settings import SmtpSettings, SmtpSettingsResponse

logger = logging.getLogger(__name__)

SMTP_EMAIL = "smtp_email"
SMTP_PASSWORD = "smtp_password"
SMTP_FROM_NAME = "smtp_from_name"
SMTP_HOST = "smtp_host"
SMTP_PORT = "smtp_port"


def get_setting(db: Session, key: str) -> Optional[str]:
    """Retourne la valeur d'un paramètre, ou None s'il n'existe pas."""
    setting = db.execute(select(Setting).where(Setting.key == key)).scalar()
    return setting.value if setting else None


def set_setting(db: Session, key: str, value: str, commit: bool = True) -> None:
    """Crée ou remplace la valeur d'un paramètre."""
    setting = db.execute(select(Setting).where(Setting.key == key)).scalar()
    if setting is None:
        db.add(Setting(key=key, value=value))
    else:
        setting.value = value
    if commit:
        db.commit()


def get_smtp_settings(db: Session) -> Optional[SmtpSettings]:
    """
    Charge la configuration SMTP.
    Retourne None si l'adresse ou le mot de passe manque ; les autres champs
    prennent leur valeur par défaut.
    """
    email = get_setting(db, SMTP_EMAIL)
    password = get_setting(db, SMTP_PASSWORD)
    if not email or not password:
        return None

    return SmtpSettings(
        email=email,
        password=password,
        from_name=get_setting(db, SMTP_FROM_NAME) or app_settings.SMTP_DEFAULT_FROM_NAME,
        host=get_setting(db, SMTP_HOST) or app_settings.SMTP_DEFAULT_HOST,
        port=_parse_port(get_setting(db, SMTP_PORT)),
    )


def save_smtp_settings(db: Session, data: SmtpSettings) -> None:
    """Enregistre les cinq paramètres SMTP en une seule transaction."""
    set_setting(db, SMTP_EMAIL, data.email, commit=False)
    set_setting(db, SMTP_PASSWORD, data.password, commit=False)
    set_setting(db, SMTP_FROM_NAME, data.from_name, commit=False)
    set_setting(db, SMTP_HOST, data.host, commit=False)
    set_setting(db, SMTP_PORT, str(data.port), commit=False)
    db.commit()
    logger.info("Paramètres SMTP enregistrés pour %s (%s:%s)", data.email, data.host, data.port)


def get_smtp_settings_view(db: Session) -> SmtpSettingsResponse:
    """Configuration affichée dans l'écran Paramètres, mot de passe masqué."""
    email = get_setting(db, SMTP_EMAIL) or ""
    password = get_setting(db, SMTP_PASSWORD) or ""
    return SmtpSettingsResponse(
        email=email,
        from_name=get_setting(db, SMTP_FROM_NAME) or app_settings.SMTP_DEFAULT_FROM_NAME,
        host=get_setting(db, SMTP_HOST) or app_settings.SMTP_DEFAULT_HOST,
        port=_parse_port(get_setting(db, SMTP_PORT)),
        has_password=bool(password),
        configured=bool(email and password),
    )


def _parse_port(raw: Optional[str]) -> int:
    if not raw:
        return app_settings.SMTP_DEFAULT_PORT
    try:
        port = int(raw.strip())
    except ValueError:
        port = 0
    if not 0 < port < 65536:
        logger.warning("Port SMTP invalide en base (%r), utilisation du port %s", raw, app_settings.SMTP_DEFAULT_PORT)
        return app_settings.SMTP_DEFAULT_PORT
    return port
