"""
Router pour les élèves et leurs contacts email.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.student import (
    EmailContactCreate,
    EmailContactResponse,
    EmailContactUpdate,
    StudentCreate,
    StudentResponse,
    StudentUpdate,
)
from app.services import student_service

router = APIRouter(prefix="/api/v1/students", tags=["Élèves"])
contacts_router = APIRouter(prefix="/api/v1/contacts", tags=["Contacts"])


@router.post("", response_model=StudentResponse, status_code=201, summary="Créer un élève")
def create_student(data: StudentCreate, db: Session = Depends(get_db)):
    try:
        return student_service.create_student(db, data)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{student_id}", response_model=StudentResponse, summary="Détail d'un élève")
def get_student(student_id: int, db: Session = Depends(get_db)):
    student = student_service.get_student(db, student_id)
    if student is None:
        raise HTTPException(status_code=404, detail="Élève introuvable.")
    return student


@router.put("/{student_id}", response_model=StudentResponse, summary="Modifier un élève")
def update_student(student_id: int, data: StudentUpdate, db: Session = Depends(get_db)):
    """Met à jour les champs fournis d'un élève. Les champs absents ne sont pas modifiés."""
    try:
        student = student_service.update_student(db, student_id, data)
    except ValueError as e:
        raise HTTPException(status_code=404 if "introuvable" in str(e) else 409, detail=str(e))
    if student is None:
        raise HTTPException(status_code=404, detail="Élève introuvable.")
    return student


@router.delete("/{student_id}", status_code=204, summary="Supprimer un élève")
def delete_student(student_id: int, db: Session = Depends(get_db)):
    """Supprime définitivement un élève. Ses contacts et ses notes sont supprimés en cascade."""
    if not student_service.delete_student(db, student_id):
        raise HTTPException(status_code=404, detail="Élève introuvable.")


# --- Contacts email ---

@router.get("/{student_id}/contacts", response_model=List[EmailContactResponse], summary="Contacts d'un élève")
def list_contacts(student_id: int, db: Session = Depends(get_db)):
    return student_service.get_contacts(db, student_id)


@router.post(
    "/{student_id}/contacts",
    response_model=EmailContactResponse,
    status_code=201,
    summary="Ajouter un contact",
)
def create_contact(student_id: int, data: EmailContactCreate, db: Session = Depends(get_db)):
    try:
        return student_service.create_contact(db, student_id, data)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@contacts_router.put("/{contact_id}", response_model=EmailContactResponse, summary="Modifier un contact")
def update_contact(contact_id: int, data: EmailContactUpdate, db: Session = Depends(get_db)):
    try:
        contact = student_service.update_contact(db, contact_id, data)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if contact is None:
        raise HTTPException(status_code=404, detail="Contact introuvable.")
    return contact


@contacts_router.delete("/{contact_id}", status_code=204, summary="Supprimer un contact")
def delete_contact(contact_id: int, db: Session = Depends(get_db)):
    if not student_service.delete_contact(db, contact_id):
        raise HTTPException(status_code=404, detail="Contact introuvable.")
