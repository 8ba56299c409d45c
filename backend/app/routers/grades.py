"""
Router pour les notes.
La saisie depuis la grille passe par PUT /api/v1/grades/cell : une valeur vide efface la note.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.grade import (
    GradeCellCommit,
    GradeCellResult,
    GradeCreate,
    GradeResponse,
    GradeUpdate,
)
from app.services import grade_matrix, grade_service

router = APIRouter(prefix="/api/v1/grades", tags=["Notes"])


@router.get("", response_model=List[GradeResponse], summary="Lister les notes")
def list_grades(
    student_id: Optional[int] = None,
    assignment_id: Optional[int] = None,
    db: Session = Depends(get_db),
):
    """
    Notes d'un élève (`student_id`), d'un devoir (`assignment_id`),
    ou la note d'un couple si les deux sont fournis.
    """
    if student_id is not None and assignment_id is not None:
        grade = grade_service.get_grade(db, student_id, assignment_id)
        return [grade] if grade else []
    if student_id is not None:
        return grade_service.get_grades_by_student(db, student_id)
    if assignment_id is not None:
        return grade_service.get_grades_by_assignment(db, assignment_id)
    raise HTTPException(status_code=400, detail="Précisez student_id et/ou assignment_id.")


@router.post("", response_model=GradeResponse, status_code=201, summary="Créer une note")
def create_grade(data: GradeCreate, db: Session = Depends(get_db)):
    try:
        return grade_service.create_grade(db, data)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.put("/cell", response_model=GradeCellResult, summary="Saisir une cellule de la grille")
def commit_cell(data: GradeCellCommit, db: Session = Depends(get_db)):
    """
    Crée, met à jour ou supprime la note du couple (élève, devoir) selon la valeur saisie.
    Idempotent : renvoyer la même valeur ne change rien.
    """
    try:
        grade = grade_matrix.commit_grade_cell(db, data.student_id, data.assignment_id, data.value)
    except grade_matrix.GradeCommitError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return GradeCellResult(student_id=data.student_id, assignment_id=data.assignment_id, grade=grade)


@router.put("/{grade_id}", response_model=GradeResponse, summary="Modifier une note")
def update_grade(grade_id: int, data: GradeUpdate, db: Session = Depends(get_db)):
    try:
        grade = grade_service.update_grade(db, grade_id, data)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if grade is None:
        raise HTTPException(status_code=404, detail="Note introuvable.")
    return grade


@router.delete("/{grade_id}", status_code=204, summary="Supprimer une note")
def delete_grade(grade_id: int, db: Session = Depends(get_db)):
    if not grade_service.delete_grade(db, grade_id):
        raise HTTPException(status_code=404, detail="Note introuvable.")
