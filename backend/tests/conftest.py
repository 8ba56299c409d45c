"""
Configuration partagée pour tous les tests.

- client     : client HTTP avec la dépendance get_db remplacée par un MagicMock
- db_session : vraie session SQLAlchemy sur une base SQLite en mémoire
               (clés étrangères actives, tables créées à chaque test)
"""

import os

# Avant tout import de l'application : aucune base fichier pendant les tests
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import date
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.database import Base, enable_sqlite_foreign_keys, get_db
from app.main import app
from app.models.assignment import Assignment
from app.models.grade import Grade
from app.models.school_class import SchoolClass
from app.models.student import EmailContact, Student


@pytest.fixture
def client():
    """Client HTTP de test avec la BDD mockée."""
    mock_db = MagicMock()
    app.dependency_overrides[get_db] = lambda: mock_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def db_session():
    """Session sur une base SQLite en mémoire, vidée après chaque test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def gradebook(db_session):
    """
    Une classe avec deux élèves et deux devoirs :
    A1 (10/01) et A2 (20/01). Ana a une note pour A2 uniquement.
    """
    school_class = SchoolClass(name="Math 7", description="")
    db_session.add(school_class)
    db_session.flush()

    ana = Student(class_id=school_class.id, first_name="Ana", last_name="Cruz", google_drive_url="")
    ben = Student(
        class_id=school_class.id,
        first_name="Ben",
        last_name="Abbott",
        google_drive_url="https://drive.example.com/ben",
    )
    a1 = Assignment(class_id=school_class.id, label="Quiz 1", date=date(2026, 1, 10))
    a2 = Assignment(class_id=school_class.id, label="Essay", date=date(2026, 1, 20))
    db_session.add_all([ana, ben, a1, a2])
    db_session.flush()

    db_session.add_all([
        EmailContact(student_id=ana.id, email="maria.cruz@example.com", contact_name="Maria Cruz", relationship="Mother"),
        EmailContact(student_id=ana.id, email="jose.cruz@example.com", contact_name="Jose Cruz", relationship="Father"),
        Grade(student_id=ana.id, assignment_id=a2.id, grade="B+", notes="late"),
    ])
    db_session.commit()

    return {"class": school_class, "ana": ana, "ben": ben, "a1": a1, "a2": a2}
