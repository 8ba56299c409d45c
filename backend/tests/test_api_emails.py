"""
Tests d'intégration API pour l'envoi des bulletins par email.
Endpoint : POST /api/v1/emails/send
"""

from unittest.mock import patch

from app.schemas.mailing import EmailSendResult

TEMPLATE = {
    "subject": "Bulletin de {{student_full_name}}",
    "message": "<p>Bonjour,</p>{{grade_table}}",
    "include_grades": True,
    "selected_assignments": [],
}


def test_send_emails_succes(client):
    with patch("app.routers.emails.email_dispatch_service.send_emails_to_students") as mock:
        mock.return_value = EmailSendResult(success=True, sent_count=2)
        response = client.post("/api/v1/emails/send", json={"student_ids": [1, 2, 3], "template": TEMPLATE})

    assert response.status_code == 200
    assert response.json() == {"success": True, "sent_count": 2, "error": None}
    request = mock.call_args[0][1]
    assert request.student_ids == [1, 2, 3]
    assert request.template.include_grades is True


def test_send_emails_smtp_non_configure(client):
    """Configuration absente → 200 avec success=false (résultat structuré)."""
    with patch("app.routers.emails.email_dispatch_service.send_emails_to_students") as mock:
        mock.return_value = EmailSendResult(success=False, error="SMTP settings not configured")
        response = client.post("/api/v1/emails/send", json={"student_ids": [1], "template": TEMPLATE})

    assert response.status_code == 200
    assert response.json()["success"] is False
    assert response.json()["error"] == "SMTP settings not configured"


def test_send_emails_eleve_introuvable(client):
    with patch(
        "app.routers.emails.email_dispatch_service.send_emails_to_students",
        side_effect=ValueError("Élève 404 introuvable."),
    ):
        response = client.post("/api/v1/emails/send", json={"student_ids": [404], "template": TEMPLATE})

    assert response.status_code == 404


def test_send_emails_aucun_eleve(client):
    response = client.post("/api/v1/emails/send", json={"student_ids": [], "template": TEMPLATE})
    assert response.status_code == 422


def test_send_emails_objet_vide(client):
    template = dict(TEMPLATE, subject="   ")
    response = client.post("/api/v1/emails/send", json={"student_ids": [1], "template": template})
    assert response.status_code == 422
