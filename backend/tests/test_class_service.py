"""
Tests unitaires pour le service de gestion des classes.
"""

from datetime import datetime
from unittest.mock import MagicMock, patch

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from app.schemas.school_class import ClassCreate, ClassUpdate
from app.services.class_service import (
    create_class,
    delete_class,
    get_class,
    get_classes,
    update_class,
)


# --- Helpers ---

def make_class_mock(class_id=1, name="Math 7", description=""):
    c = MagicMock()
    c.id = class_id
    c.name = name
    c.description = description
    c.created_at = datetime(2026, 9, 1, 8, 0)
    return c


def make_db_mock(school_class=None, classes=None):
    db = MagicMock()
    db.get.return_value = school_class
    db.execute.return_value.scalars.return_value.all.return_value = classes or []
    return db


# --- Validation des schémas ---

def test_class_create_nom_vide_rejete():
    with pytest.raises(ValidationError):
        ClassCreate(name="   ")


def test_class_create_nom_valide():
    c = ClassCreate(name="  Math 7  ")
    assert c.name == "Math 7"  # strip appliqué
    assert c.description == ""


def test_class_update_nom_vide_rejete():
    with pytest.raises(ValidationError):
        ClassUpdate(name="")


# --- create_class ---

def test_create_class_succes():
    db = make_db_mock()
    with patch("app.services.class_service.ClassResponse.model_validate") as mock_resp:
        mock_resp.return_value = MagicMock()
        result = create_class(db, ClassCreate(name="Science 8", description="Salle 12"))

    db.add.assert_called_once()
    db.commit.assert_called_once()
    added = db.add.call_args[0][0]
    assert added.name == "Science 8"
    assert added.description == "Salle 12"
    assert result is mock_resp.return_value


def test_create_class_description_none():
    db = make_db_mock()
    with patch("app.services.class_service.ClassResponse.model_validate"):
        create_class(db, ClassCreate(name="Science 8", description=None))

    assert db.add.call_args[0][0].description == ""


# --- get_classes / get_class ---

def test_get_classes():
    db = make_db_mock(classes=[make_class_mock(2, "B"), make_class_mock(1, "A")])
    result = get_classes(db)
    assert [c.id for c in result] == [2, 1]


def test_get_class_inexistante():
    db = make_db_mock(school_class=None)
    assert get_class(db, 99) is None


def test_get_class_existante():
    db = make_db_mock(school_class=make_class_mock())
    result = get_class(db, 1)
    assert result.name == "Math 7"


# --- update_class ---

def test_update_class_partielle():
    c = make_class_mock(description="Salle 3")
    db = make_db_mock(school_class=c)
    result = update_class(db, 1, ClassUpdate(name="Math 7B"))

    assert result.name == "Math 7B"
    assert result.description == "Salle 3"
    db.commit.assert_called_once()


def test_update_class_inexistante():
    db = make_db_mock(school_class=None)
    assert update_class(db, 99, ClassUpdate(name="X")) is None
    db.commit.assert_not_called()


# --- delete_class ---

def test_delete_class_inexistante():
    db = make_db_mock(school_class=None)
    assert delete_class(db, 99) is False
    db.commit.assert_not_called()


def test_delete_class_existante():
    c = make_class_mock()
    db = make_db_mock(school_class=c)
    assert delete_class(db, 1) is True
    db.delete.assert_called_once_with(c)
    db.commit.assert_called_once()


def test_update_class_contrainte_violee_rollback():
    db = make_db_mock(school_class=make_class_mock())
    db.commit.side_effect = IntegrityError("NOT NULL constraint failed", None, None)

    with pytest.raises(ValueError, match="Impossible de modifier la classe"):
        update_class(db, 1, ClassUpdate(name="Math 7B"))

    db.rollback.assert_called_once()
    db.refresh.assert_not_called()
