"""
Router pour les devoirs.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.assignment import AssignmentCreate, AssignmentResponse, AssignmentUpdate
from app.services import assignment_service

router = APIRouter(prefix="/api/v1/assignments", tags=["Devoirs"])


@router.post("", response_model=AssignmentResponse, status_code=201, summary="Créer un devoir")
def create_assignment(data: AssignmentCreate, db: Session = Depends(get_db)):
    try:
        return assignment_service.create_assignment(db, data)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{assignment_id}", response_model=AssignmentResponse, summary="Détail d'un devoir")
def get_assignment(assignment_id: int, db: Session = Depends(get_db)):
    assignment = assignment_service.get_assignment(db, assignment_id)
    if assignment is None:
        raise HTTPException(status_code=404, detail="Devoir introuvable.")
    return assignment


@router.put("/{assignment_id}", response_model=AssignmentResponse, summary="Modifier un devoir")
def update_assignment(assignment_id: int, data: AssignmentUpdate, db: Session = Depends(get_db)):
    try:
        assignment = assignment_service.update_assignment(db, assignment_id, data)
    except ValueError as e:
        raise HTTPException(status_code=404 if "introuvable" in str(e) else 409, detail=str(e))
    if assignment is None:
        raise HTTPException(status_code=404, detail="Devoir introuvable.")
    return assignment


@router.delete("/{assignment_id}", status_code=204, summary="Supprimer un devoir")
def delete_assignment(assignment_id: int, db: Session = Depends(get_db)):
    """Supprime un devoir et toutes ses notes."""
    if not assignment_service.delete_assignment(db, assignment_id):
        raise HTTPException(status_code=404, detail="Devoir introuvable.")
