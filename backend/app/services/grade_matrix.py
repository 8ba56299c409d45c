"""
Grille de saisie des notes d'une classe (élèves x devoirs).

La grille est creuse : un dictionnaire indexé par (student_id, assignment_id)
ne contient que les notes existantes. Une cellule absente signifie « pas encore
de note », pas zéro.

La saisie d'une cellule est une réconciliation avec la base :
  - valeur vide + note existante      → suppression de la note
  - valeur non vide + note existante  → mise à jour (notes remises à vide)
  - valeur non vide + pas de note     → création
  - valeur vide + pas de note         → rien

La base reste la référence : la grille n'est qu'un cache, mis à jour
uniquement après un commit réussi. Elle n'est pas invalidée par les autres
écritures (suppression d'un élève ailleurs...) et doit alors être rechargée.
"""

import logging
from typing import Dict, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.grade import Grade
from app.models.school_class import SchoolClass
from app.schemas.assignment import AssignmentResponse
from app.schemas.grade import GradeMatrixResponse, GradeResponse
from app.schemas.student import StudentResponse
from app.services import assignment_service, grade_service, student_service

logger = logging.getLogger(__name__)

CellKey = Tuple[int, int]


class GradeCommitError(ValueError):
    """Échec d'écriture en base lors de la saisie d'une cellule."""


class GradeMatrix:
    """Cache creux des notes d'une classe, indexé par (student_id, assignment_id)."""

    def __init__(
        self,
        class_id: int,
        students: List[StudentResponse],
        assignments: List[AssignmentResponse],
        cells: Dict[CellKey, GradeResponse],
    ):
        self.class_id = class_id
        self.students = students
        self.assignments = assignments
        self.cells = cells

    @classmethod
    def load(cls, db: Session, class_id: int) -> "GradeMatrix":
        """
        Charge les élèves et devoirs de la classe, puis les notes de chaque élève.
        Lève une ValueError si la classe est introuvable.
        """
        if db.get(SchoolClass, class_id) is None:
            raise ValueError("Classe introuvable.")

        students = [StudentResponse.model_validate(s) for s in student_service.get_students(db, class_id)]
        assignments = [AssignmentResponse.model_validate(a) for a in assignment_service.get_assignments(db, class_id)]

        cells: Dict[CellKey, GradeResponse] = {}
        for student in students:
            for grade in grade_service.get_grades_by_student(db, student.id):
                cells[(grade.student_id, grade.assignment_id)] = GradeResponse.model_validate(grade)

        logger.info(
            "Grille chargée pour la classe %s : %d élèves, %d devoirs, %d notes",
            class_id, len(students), len(assignments), len(cells),
        )
        return cls(class_id, students, assignments, cells)

    def get(self, student_id: int, assignment_id: int) -> Optional[GradeResponse]:
        return self.cells.get((student_id, assignment_id))

    def lookup(self, student_id: int, assignment_id: int) -> str:
        """Texte de la note, ou chaîne vide si la cellule est vide."""
        grade = self.cells.get((student_id, assignment_id))
        return grade.grade if grade else ""

    def commit_cell(
        self, db: Session, student_id: int, assignment_id: int, value: str
    ) -> Optional[GradeResponse]:
        """
        Enregistre la saisie d'une cellule puis met à jour la grille.
        Retourne la note enregistrée, ou None si la cellule est désormais vide.
        Lève GradeCommitError si l'écriture échoue ; la grille n'est alors pas modifiée.
        """
        key = (student_id, assignment_id)
        cached = self.cells.get(key)

        # La grille peut être périmée : on vérifie toujours l'existence en base,
        # et un id en cache n'est fiable que s'il désigne encore le même couple
        existing = db.get(Grade, cached.id) if cached else None
        if existing is not None and (
            existing.student_id != student_id or existing.assignment_id != assignment_id
        ):
            existing = None
        if existing is None:
            existing = grade_service.get_grade(db, student_id, assignment_id)

        result = _reconcile(db, existing, student_id, assignment_id, value)

        if result is None:
            self.cells.pop(key, None)
        else:
            self.cells[key] = result
        return result

    def to_response(self) -> GradeMatrixResponse:
        return GradeMatrixResponse(
            class_id=self.class_id,
            students=self.students,
            assignments=self.assignments,
            grades=list(self.cells.values()),
        )


def load_matrix(db: Session, class_id: int) -> GradeMatrix:
    return GradeMatrix.load(db, class_id)


def commit_grade_cell(
    db: Session, student_id: int, assignment_id: int, value: str
) -> Optional[GradeResponse]:
    """Saisie d'une cellule sans grille en mémoire (API HTTP) : réconciliation directe avec la base."""
    existing = grade_service.get_grade(db, student_id, assignment_id)
    return _reconcile(db, existing, student_id, assignment_id, value)


def _reconcile(
    db: Session,
    existing: Optional[Grade],
    student_id: int,
    assignment_id: int,
    value: str,
) -> Optional[GradeResponse]:
    """Choisit entre création, mise à jour et suppression selon la valeur et la note existante."""
    value = value or ""

    try:
        # Espaces seuls = cellule vide ; sinon la valeur est enregistrée telle quelle
        if not value.strip():
            if existing is None:
                return None
            db.delete(existing)
            db.commit()
            logger.info("Note supprimée : élève %s, devoir %s", student_id, assignment_id)
            return None

        if existing is not None:
            if existing.grade != value or existing.notes:
                existing.grade = value
                existing.notes = ""  # les remarques ne sont pas éditables depuis la grille
                db.commit()
                db.refresh(existing)
            return GradeResponse.model_validate(existing)

        grade = Grade(student_id=student_id, assignment_id=assignment_id, grade=value, notes="")
        db.add(grade)
        db.commit()
        db.refresh(grade)
        logger.info("Note créée : élève %s, devoir %s → %s", student_id, assignment_id, value)
        return GradeResponse.model_validate(grade)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(
            "Échec de l'enregistrement de la note (élève %s, devoir %s) : %s",
            student_id, assignment_id, exc,
        )
        raise GradeCommitError(f"Impossible d'enregistrer la note : {exc}") from exc
