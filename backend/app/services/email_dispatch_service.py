"""
Service d'envoi groupé des bulletins par email (publipostage).

Flux :
  1. Vérifier que la configuration SMTP est complète (sinon aucun envoi)
  2. Ouvrir une seule session SMTP pour tout le lot
  3. Pour chaque élève, dans l'ordre de la liste :
     a. Filtrer ses notes
     b. Restreindre les devoirs à la sélection du modèle (vide = tous)
     c. Construire le tableau de notes si demandé
     d. Personnaliser l'objet et le message
     e. Envoyer UN message adressé à tous ses contacts (séparés par des virgules)
     f. Skip si l'élève n'a aucun contact (ni erreur, ni comptage)
  4. Retourner le nombre de messages envoyés

Une erreur SMTP interrompt le reste du lot : le résultat est un échec portant
le message d'erreur du transport, sans nombre d'envois. Le nombre de messages
déjà partis est seulement journalisé.
"""

import logging
from typing import Iterable, Optional, Sequence

from sqlalchemy.orm import Session

from app.schemas.assignment import AssignmentResponse
from app.schemas.grade import GradeResponse
from app.schemas.mailing import EmailRecipient, EmailSendRequest, EmailSendResult, EmailTemplate
from app.schemas.settings import SmtpSettings
from app.schemas.student import EmailContactResponse, StudentResponse
from app.services import assignment_service, grade_service, settings_service, student_service
from app.services.email_service import describe_smtp_error, open_smtp_session
from app.services.mail_merge import build_grade_table, render

logger = logging.getLogger(__name__)

SMTP_NOT_CONFIGURED = "SMTP settings not configured"


def send_emails(
    recipients: Sequence[EmailRecipient],
    template: EmailTemplate,
    assignments: Sequence,
    all_grades: Iterable,
    smtp_settings: Optional[SmtpSettings],
) -> EmailSendResult:
    """
    Envoie un email personnalisé par élève sur une seule session SMTP.
    Ne lève jamais d'exception : les échecs sont retournés dans le résultat.
    """
    if smtp_settings is None:
        logger.warning("Envoi annulé : paramètres SMTP non configurés")
        return EmailSendResult(success=False, error=SMTP_NOT_CONFIGURED)

    all_grades = list(all_grades)
    if template.selected_assignments:
        selected = set(template.selected_assignments)
        relevant_assignments = [a for a in assignments if a.id in selected]
    else:
        relevant_assignments = list(assignments)

    sent_count = 0
    try:
        with open_smtp_session(smtp_settings) as session:
            for recipient in recipients:
                student = recipient.student
                to = ", ".join(c.email for c in recipient.contacts)
                if not to:
                    logger.info("Élève %s sans contact email, ignoré", student.id)
                    continue

                grade_table = ""
                if template.include_grades:
                    student_grades = [g for g in all_grades if g.student_id == student.id]
                    grade_table = build_grade_table(student_grades, relevant_assignments)

                session.send_mail(
                    to=to,
                    subject=render(template.subject, student),
                    html_body=render(template.message, student, grade_table),
                )
                sent_count += 1
    except Exception as exc:
        logger.error(
            "Envoi groupé interrompu après %d message(s) sur %d élève(s) : %s",
            sent_count, len(recipients), exc,
        )
        return EmailSendResult(success=False, error=describe_smtp_error(exc))

    logger.info("Envoi groupé terminé : %d message(s) envoyé(s)", sent_count)
    return EmailSendResult(success=True, sent_count=sent_count)


def send_emails_to_students(db: Session, request: EmailSendRequest) -> EmailSendResult:
    """
    Prépare puis lance l'envoi pour les élèves sélectionnés.

    Charge chaque élève et ses contacts, les devoirs de toutes les classes
    concernées (date décroissante), les notes de chaque élève, et la
    configuration SMTP (une seule fois pour l'opération).
    Lève une ValueError si un élève est introuvable.
    """
    recipients = []
    grades = []
    class_ids = set()

    for student_id in request.student_ids:
        student = student_service.get_student(db, student_id)
        if student is None:
            raise ValueError(f"Élève {student_id} introuvable.")
        class_ids.add(student.class_id)
        recipients.append(
            EmailRecipient(
                student=StudentResponse.model_validate(student),
                contacts=[
                    EmailContactResponse.model_validate(c)
                    for c in student_service.get_contacts(db, student_id)
                ],
            )
        )
        grades.extend(
            GradeResponse.model_validate(g)
            for g in grade_service.get_grades_by_student(db, student_id)
        )

    assignments = [
        AssignmentResponse.model_validate(a)
        for a in assignment_service.get_assignments_for_classes(db, class_ids)
    ]

    return send_emails(
        recipients,
        request.template,
        assignments,
        grades,
        settings_service.get_smtp_settings(db),
    )
