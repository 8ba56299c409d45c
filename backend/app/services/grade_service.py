"""
Accès aux notes en base (lecture, création, mise à jour, suppression).
La saisie depuis la grille passe par grade_matrix, qui s'appuie sur ces fonctions.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.grade import Grade
from app.schemas.grade import GradeCreate, GradeUpdate

logger = logging.getLogger(__name__)


def get_grades_by_student(db: Session, student_id: int) -> list[Grade]:
    return db.execute(
        select(Grade).where(Grade.student_id == student_id)
    ).scalars().all()


def get_grades_by_assignment(db: Session, assignment_id: int) -> list[Grade]:
    return db.execute(
        select(Grade).where(Grade.assignment_id == assignment_id)
    ).scalars().all()


def get_grade(db: Session, student_id: int, assignment_id: int) -> Optional[Grade]:
    """Retourne la note d'un élève pour un devoir, ou None."""
    return db.execute(
        select(Grade).where(
            Grade.student_id == student_id,
            Grade.assignment_id == assignment_id,
        )
    ).scalar()


def create_grade(db: Session, data: GradeCreate) -> Grade:
    """
    Crée une note.
    Lève une ValueError si une note existe déjà pour ce couple ou si l'élève/le devoir est introuvable.
    """
    grade = Grade(
        student_id=data.student_id,
        assignment_id=data.assignment_id,
        grade=data.grade,
        notes=data.notes or "",
    )
    db.add(grade)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValueError(
            f"Impossible de créer la note : une note existe déjà pour l'élève {data.student_id} "
            f"et le devoir {data.assignment_id}, ou l'un des deux est introuvable."
        )
    db.refresh(grade)
    return grade


def update_grade(db: Session, grade_id: int, data: GradeUpdate) -> Optional[Grade]:
    """Met à jour les champs fournis d'une note."""
    grade = db.get(Grade, grade_id)
    if grade is None:
        return None

    update_data = data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(grade, field, value)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValueError("Impossible de modifier la note : données invalides.")
    db.refresh(grade)
    return grade


def delete_grade(db: Session, grade_id: int) -> bool:
    grade = db.get(Grade, grade_id)
    if grade is None:
        return False

    db.delete(grade)
    db.commit()
    return True
