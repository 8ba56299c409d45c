"""
Router pour la gestion des classes.
Inclut les listes d'élèves et de devoirs d'une classe, et sa grille de notes.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.assignment import AssignmentResponse
from app.schemas.grade import GradeMatrixResponse
from app.schemas.school_class import ClassCreate, ClassResponse, ClassUpdate
from app.schemas.student import StudentResponse
from app.services import assignment_service, class_service, grade_matrix, student_service

router = APIRouter(prefix="/api/v1/classes", tags=["Classes"])


@router.post("", response_model=ClassResponse, status_code=201, summary="Créer une classe")
def create_class(data: ClassCreate, db: Session = Depends(get_db)):
    return class_service.create_class(db, data)


@router.get("", response_model=List[ClassResponse], summary="Lister les classes")
def list_classes(db: Session = Depends(get_db)):
    """Retourne toutes les classes, de la plus récente à la plus ancienne."""
    return class_service.get_classes(db)


@router.get("/{class_id}", response_model=ClassResponse, summary="Détail d'une classe")
def get_class(class_id: int, db: Session = Depends(get_db)):
    school_class = class_service.get_class(db, class_id)
    if school_class is None:
        raise HTTPException(status_code=404, detail="Classe introuvable.")
    return school_class


@router.put("/{class_id}", response_model=ClassResponse, summary="Modifier une classe")
def update_class(class_id: int, data: ClassUpdate, db: Session = Depends(get_db)):
    try:
        result = class_service.update_class(db, class_id, data)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if result is None:
        raise HTTPException(status_code=404, detail="Classe introuvable.")
    return result


@router.delete("/{class_id}", status_code=204, summary="Supprimer une classe")
def delete_class(class_id: int, db: Session = Depends(get_db)):
    """Supprime une classe avec ses élèves, contacts, devoirs et notes."""
    if not class_service.delete_class(db, class_id):
        raise HTTPException(status_code=404, detail="Classe introuvable.")


@router.get("/{class_id}/students", response_model=List[StudentResponse], summary="Élèves d'une classe")
def list_class_students(class_id: int, db: Session = Depends(get_db)):
    """Retourne les élèves de la classe triés par nom puis prénom."""
    return student_service.get_students(db, class_id)


@router.get("/{class_id}/assignments", response_model=List[AssignmentResponse], summary="Devoirs d'une classe")
def list_class_assignments(class_id: int, db: Session = Depends(get_db)):
    """Retourne les devoirs de la classe, du plus récent au plus ancien."""
    return assignment_service.get_assignments(db, class_id)


@router.get("/{class_id}/grade-matrix", response_model=GradeMatrixResponse, summary="Grille de notes")
def get_grade_matrix(class_id: int, db: Session = Depends(get_db)):
    """
    Retourne la grille de saisie : élèves, devoirs et notes existantes.
    Les cellules sans note ne figurent pas dans `grades`.
    """
    try:
        return grade_matrix.load_matrix(db, class_id).to_response()
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
