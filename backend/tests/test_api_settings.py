"""
Tests d'intégration API pour les paramètres SMTP.
"""

from unittest.mock import patch

from app.schemas.settings import SmtpSettingsResponse, SmtpTestResult

SMTP_BODY = {
    "email": "teacher@example.com",
    "password": "app-password",
    "from_name": "Mme Martin",
    "host": "smtp.gmail.com",
    "port": 587,
}


def make_view(**kwargs) -> SmtpSettingsResponse:
    return SmtpSettingsResponse(
        email=kwargs.get("email", "teacher@example.com"),
        from_name=kwargs.get("from_name", "PSIA Gradebook"),
        host=kwargs.get("host", "smtp.gmail.com"),
        port=kwargs.get("port", 587),
        has_password=kwargs.get("has_password", True),
        configured=kwargs.get("configured", True),
    )


def test_get_smtp_settings(client):
    with patch("app.routers.settings.settings_service.get_smtp_settings_view", return_value=make_view()):
        response = client.get("/api/v1/settings/smtp")

    assert response.status_code == 200
    assert response.json()["configured"] is True
    assert "password" not in response.json()


def test_save_smtp_settings(client):
    with patch("app.routers.settings.settings_service.save_smtp_settings") as mock_save, \
         patch("app.routers.settings.settings_service.get_smtp_settings_view", return_value=make_view()):
        response = client.put("/api/v1/settings/smtp", json=SMTP_BODY)

    assert response.status_code == 200
    saved = mock_save.call_args[0][1]
    assert saved.password == "app-password"
    assert saved.port == 587


def test_save_smtp_settings_port_invalide(client):
    response = client.put("/api/v1/settings/smtp", json=dict(SMTP_BODY, port=70000))
    assert response.status_code == 422


def test_test_smtp_connection_echec(client):
    with patch(
        "app.routers.settings.email_service.check_smtp_connection",
        return_value=SmtpTestResult(success=False, error="535 Bad credentials"),
    ):
        response = client.post("/api/v1/settings/smtp/test", json=SMTP_BODY)

    assert response.status_code == 200
    assert response.json() == {"success": False, "error": "535 Bad credentials"}


def test_test_smtp_connection_defaults(client):
    """Seuls email et mot de passe sont obligatoires ; le reste prend les valeurs par défaut."""
    with patch(
        "app.routers.settings.email_service.check_smtp_connection",
        return_value=SmtpTestResult(success=True),
    ) as mock:
        response = client.post("/api/v1/settings/smtp/test", json={"email": "t@example.com", "password": "x"})

    assert response.status_code == 200
    settings = mock.call_args[0][0]
    assert settings.host == "smtp.gmail.com"
    assert settings.port == 587
