"""
Service métier pour la gestion des classes.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.school_class import SchoolClass
from app.schemas.school_class import ClassCreate, ClassResponse, ClassUpdate

logger = logging.getLogger(__name__)


def create_class(db: Session, data: ClassCreate) -> ClassResponse:
    """Crée une nouvelle classe."""
    school_class = SchoolClass(name=data.name, description=data.description or "")
    db.add(school_class)
    db.commit()
    db.refresh(school_class)
    logger.info("Classe créée : %s (%s)", school_class.name, school_class.id)
    return ClassResponse.model_validate(school_class)


def get_classes(db: Session) -> list[ClassResponse]:
    """Retourne toutes les classes, de la plus récente à la plus ancienne."""
    classes = db.execute(
        select(SchoolClass).order_by(SchoolClass.created_at.desc(), SchoolClass.id.desc())
    ).scalars().all()
    return [ClassResponse.model_validate(c) for c in classes]


def get_class(db: Session, class_id: int) -> Optional[ClassResponse]:
    """Retourne une classe par son ID, ou None si inexistante."""
    school_class = db.get(SchoolClass, class_id)
    if school_class is None:
        return None
    return ClassResponse.model_validate(school_class)


def update_class(db: Session, class_id: int, data: ClassUpdate) -> Optional[ClassResponse]:
    """Met à jour les champs fournis d'une classe."""
    school_class = db.get(SchoolClass, class_id)
    if school_class is None:
        return None

    update_data = data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(school_class, field, value)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValueError("Impossible de modifier la classe : données invalides.")
    db.refresh(school_class)
    return ClassResponse.model_validate(school_class)


def delete_class(db: Session, class_id: int) -> bool:
    """
    Supprime une classe ainsi que ses élèves, contacts, devoirs et notes (cascade).
    Retourne True si supprimé, False si introuvable.
    """
    school_class = db.get(SchoolClass, class_id)
    if school_class is None:
        return False

    db.delete(school_class)
    db.commit()
    logger.info("Classe %s supprimée", class_id)
    return True
