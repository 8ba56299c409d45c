"""
Schémas Pydantic pour les notes et la grille de saisie.
"""

from typing import List, Optional

from pydantic import BaseModel, field_validator

from app.schemas.assignment import AssignmentResponse
from app.schemas.student import StudentResponse


class GradeCreate(BaseModel):
    student_id: int
    assignment_id: int
    grade: str
    notes: Optional[str] = ""


class GradeUpdate(BaseModel):
    grade: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("grade")
    @classmethod
    def grade_not_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("La note ne peut pas être nulle ; supprimez-la pour l'effacer.")
        return v


class GradeResponse(BaseModel):
    id: int
    student_id: int
    assignment_id: int
    grade: str
    notes: Optional[str]

    model_config = {"from_attributes": True}


class GradeCellCommit(BaseModel):
    """Saisie d'une cellule de la grille. Une valeur vide efface la note."""
    student_id: int
    assignment_id: int
    value: str = ""


class GradeCellResult(BaseModel):
    """Résultat d'une saisie : la note enregistrée, ou None si la cellule est vide."""
    student_id: int
    assignment_id: int
    grade: Optional[GradeResponse] = None


class GradeMatrixResponse(BaseModel):
    """Grille complète d'une classe : lignes élèves, colonnes devoirs, cellules existantes."""
    class_id: int
    students: List[StudentResponse]
    assignments: List[AssignmentResponse]
    grades: List[GradeResponse]
