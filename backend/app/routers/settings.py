"""
Router pour les paramètres SMTP (écran Paramètres).
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.settings import SmtpSettings, SmtpSettingsResponse, SmtpTestResult
from app.services import email_service, settings_service

router = APIRouter(prefix="/api/v1/settings", tags=["Paramètres"])


@router.get("/smtp", response_model=SmtpSettingsResponse, summary="Lire la configuration SMTP")
def get_smtp_settings(db: Session = Depends(get_db)):
    """Retourne la configuration SMTP enregistrée, sans le mot de passe."""
    return settings_service.get_smtp_settings_view(db)


@router.put("/smtp", response_model=SmtpSettingsResponse, summary="Enregistrer la configuration SMTP")
def save_smtp_settings(data: SmtpSettings, db: Session = Depends(get_db)):
    settings_service.save_smtp_settings(db, data)
    return settings_service.get_smtp_settings_view(db)


@router.post("/smtp/test", response_model=SmtpTestResult, summary="Tester une configuration SMTP")
def test_smtp_settings(data: SmtpSettings):
    """
    Ouvre une session SMTP avec la configuration fournie et la vérifie,
    sans envoyer de message. Toujours 200 : le résultat indique le succès ou l'erreur.
    """
    return email_service.check_smtp_connection(data)
