"""
Tests d'intégration API pour les élèves et leurs contacts email.
"""

from unittest.mock import MagicMock, patch

from app.models.student import EmailContact, Student


# --- Helpers ---

def make_student(**kwargs) -> Student:
    s = MagicMock(spec=Student)
    s.id = kwargs.get("id", 1)
    s.class_id = kwargs.get("class_id", 1)
    s.first_name = kwargs.get("first_name", "Ana")
    s.last_name = kwargs.get("last_name", "Cruz")
    s.google_drive_url = kwargs.get("google_drive_url", "")
    return s


def make_contact(**kwargs) -> EmailContact:
    c = MagicMock(spec=EmailContact)
    c.id = kwargs.get("id", 1)
    c.student_id = kwargs.get("student_id", 1)
    c.email = kwargs.get("email", "maria.cruz@example.com")
    c.contact_name = kwargs.get("contact_name", "Maria Cruz")
    c.relationship = kwargs.get("relationship", "Mother")
    return c


# ============================================================
# Élèves
# ============================================================

def test_create_student_succes(client):
    with patch("app.routers.students.student_service.create_student") as mock:
        mock.return_value = make_student()
        response = client.post("/api/v1/students", json={
            "class_id": 1,
            "first_name": "Ana",
            "last_name": "Cruz",
        })

    assert response.status_code == 201
    assert response.json()["first_name"] == "Ana"
    assert response.json()["class_id"] == 1


def test_create_student_classe_introuvable(client):
    with patch("app.routers.students.student_service.create_student", side_effect=ValueError("Classe introuvable.")):
        response = client.post("/api/v1/students", json={
            "class_id": 99,
            "first_name": "Ana",
            "last_name": "Cruz",
        })

    assert response.status_code == 404


def test_create_student_prenom_vide(client):
    response = client.post("/api/v1/students", json={"class_id": 1, "first_name": "  ", "last_name": "Cruz"})
    assert response.status_code == 422


def test_create_student_sans_classe(client):
    response = client.post("/api/v1/students", json={"first_name": "Ana", "last_name": "Cruz"})
    assert response.status_code == 422


def test_update_student_introuvable(client):
    with patch("app.routers.students.student_service.update_student", return_value=None):
        response = client.put("/api/v1/students/99", json={"first_name": "Test"})

    assert response.status_code == 404
    assert "introuvable" in response.json()["detail"].lower()


def test_delete_student_succes(client):
    with patch("app.routers.students.student_service.delete_student", return_value=True):
        response = client.delete("/api/v1/students/1")

    assert response.status_code == 204


# ============================================================
# Contacts
# ============================================================

def test_list_contacts(client):
    with patch("app.routers.students.student_service.get_contacts") as mock:
        mock.return_value = [make_contact(), make_contact(id=2, email="jose.cruz@example.com")]
        response = client.get("/api/v1/students/1/contacts")

    assert response.status_code == 200
    assert [c["email"] for c in response.json()] == ["maria.cruz@example.com", "jose.cruz@example.com"]


def test_create_contact_email_invalide(client):
    """Adresse mal formée → 422."""
    response = client.post("/api/v1/students/1/contacts", json={
        "email": "pas-un-email",
        "contact_name": "Maria Cruz",
    })
    assert response.status_code == 422


def test_create_contact_succes(client):
    with patch("app.routers.students.student_service.create_contact") as mock:
        mock.return_value = make_contact()
        response = client.post("/api/v1/students/1/contacts", json={
            "email": "maria.cruz@example.com",
            "contact_name": "Maria Cruz",
            "relationship": "Mother",
        })

    assert response.status_code == 201
    assert response.json()["relationship"] == "Mother"


def test_delete_contact_introuvable(client):
    with patch("app.routers.students.student_service.delete_contact", return_value=False):
        response = client.delete("/api/v1/contacts/99")

    assert response.status_code == 404
