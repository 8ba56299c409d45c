"""
Router pour l'envoi des bulletins par email (publipostage).
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.mailing import EmailSendRequest, EmailSendResult
from app.services import email_dispatch_service

router = APIRouter(prefix="/api/v1/emails", tags=["Emails"])


@router.post("/send", response_model=EmailSendResult, summary="Envoyer les bulletins par email")
def send_emails(data: EmailSendRequest, db: Session = Depends(get_db)):
    """
    Envoie un email personnalisé à chaque élève sélectionné.

    - Un seul message par élève, adressé à tous ses contacts
    - Élèves sans contact ignorés (non comptés)
    - Tableau de notes inséré à la place de {{grade_table}} si include_grades
    - Paramètres SMTP absents : échec immédiat, aucune connexion
    - Erreur SMTP : le reste du lot est abandonné, l'erreur est renvoyée

    Toujours 200 si la requête est valide : `success` indique le résultat.
    """
    try:
        return email_dispatch_service.send_emails_to_students(db, data)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
