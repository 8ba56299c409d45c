"""
Service métier pour les devoirs d'une classe.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.assignment import Assignment
from app.models.school_class import SchoolClass
from app.schemas.assignment import AssignmentCreate, AssignmentUpdate

logger = logging.getLogger(__name__)


def get_assignments(db: Session, class_id: int) -> list[Assignment]:
    """
    Retourne les devoirs d'une classe, du plus récent au plus ancien.
    C'est l'ordre des colonnes de la grille et des lignes des tableaux de notes.
    """
    return db.execute(
        select(Assignment)
        .where(Assignment.class_id == class_id)
        .order_by(Assignment.date.desc(), Assignment.id.desc())
    ).scalars().all()


def get_assignments_for_classes(db: Session, class_ids) -> list[Assignment]:
    """Devoirs de plusieurs classes, triés par date décroissante (envoi groupé)."""
    if not class_ids:
        return []
    return db.execute(
        select(Assignment)
        .where(Assignment.class_id.in_(list(class_ids)))
        .order_by(Assignment.date.desc(), Assignment.id.desc())
    ).scalars().all()


def get_assignment(db: Session, assignment_id: int) -> Optional[Assignment]:
    return db.get(Assignment, assignment_id)


def create_assignment(db: Session, data: AssignmentCreate) -> Assignment:
    """Crée un devoir. Lève une ValueError si la classe est introuvable."""
    if db.get(SchoolClass, data.class_id) is None:
        raise ValueError("Classe introuvable.")

    assignment = Assignment(
        class_id=data.class_id,
        label=data.label,
        date=data.date,
        description=data.description or "",
    )
    db.add(assignment)
    db.commit()
    db.refresh(assignment)
    logger.info("Devoir créé : %s (classe %s, %s)", assignment.label, assignment.class_id, assignment.date)
    return assignment


def update_assignment(db: Session, assignment_id: int, data: AssignmentUpdate) -> Optional[Assignment]:
    assignment = db.get(Assignment, assignment_id)
    if assignment is None:
        return None

    update_data = data.model_dump(exclude_unset=True)
    if "class_id" in update_data and db.get(SchoolClass, update_data["class_id"]) is None:
        raise ValueError("Classe introuvable.")

    for field, value in update_data.items():
        setattr(assignment, field, value)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValueError("Impossible de modifier le devoir : données invalides.")
    db.refresh(assignment)
    return assignment


def delete_assignment(db: Session, assignment_id: int) -> bool:
    """Supprime un devoir et toutes les notes associées (cascade)."""
    assignment = db.get(Assignment, assignment_id)
    if assignment is None:
        return False

    db.delete(assignment)
    db.commit()
    return True
