"""
Service métier pour les élèves et leurs contacts email.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.school_class import SchoolClass
from app.models.student import EmailContact, Student
from app.schemas.student import (
    EmailContactCreate,
    EmailContactUpdate,
    StudentCreate,
    StudentUpdate,
)

logger = logging.getLogger(__name__)


def get_students(db: Session, class_id: int) -> list[Student]:
    """Retourne les élèves d'une classe triés par nom puis prénom."""
    return db.execute(
        select(Student)
        .where(Student.class_id == class_id)
        .order_by(Student.last_name, Student.first_name)
    ).scalars().all()


def get_student(db: Session, student_id: int) -> Optional[Student]:
    return db.get(Student, student_id)


def create_student(db: Session, data: StudentCreate) -> Student:
    """
    Crée un élève dans une classe existante.
    Lève une ValueError si la classe est introuvable.
    """
    if db.get(SchoolClass, data.class_id) is None:
        raise ValueError("Classe introuvable.")

    student = Student(
        class_id=data.class_id,
        first_name=data.first_name,
        last_name=data.last_name,
        google_drive_url=data.google_drive_url or "",
    )
    db.add(student)
    db.commit()
    db.refresh(student)
    return student


def update_student(db: Session, student_id: int, data: StudentUpdate) -> Optional[Student]:
    """Met à jour les champs fournis d'un élève. Les champs absents ne sont pas modifiés."""
    student = db.get(Student, student_id)
    if student is None:
        return None

    update_data = data.model_dump(exclude_unset=True)
    if "class_id" in update_data and db.get(SchoolClass, update_data["class_id"]) is None:
        raise ValueError("Classe introuvable.")

    for field, value in update_data.items():
        setattr(student, field, value)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValueError("Impossible de modifier l'élève : données invalides.")
    db.refresh(student)
    return student


def delete_student(db: Session, student_id: int) -> bool:
    """Supprime un élève, ses contacts et ses notes (cascade)."""
    student = db.get(Student, student_id)
    if student is None:
        return False

    db.delete(student)
    db.commit()
    return True


# --- Contacts email ---

def get_contacts(db: Session, student_id: int) -> list[EmailContact]:
    return db.execute(
        select(EmailContact)
        .where(EmailContact.student_id == student_id)
        .order_by(EmailContact.id)
    ).scalars().all()


def create_contact(db: Session, student_id: int, data: EmailContactCreate) -> EmailContact:
    """Ajoute un contact à un élève. Lève une ValueError si l'élève est introuvable."""
    if db.get(Student, student_id) is None:
        raise ValueError("Élève introuvable.")

    contact = EmailContact(
        student_id=student_id,
        email=str(data.email),
        contact_name=data.contact_name,
        relationship=data.relationship or "",
    )
    db.add(contact)
    db.commit()
    db.refresh(contact)
    return contact


def update_contact(db: Session, contact_id: int, data: EmailContactUpdate) -> Optional[EmailContact]:
    contact = db.get(EmailContact, contact_id)
    if contact is None:
        return None

    update_data = data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(contact, field, str(value) if field == "email" else value)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValueError("Impossible de modifier le contact : données invalides.")
    db.refresh(contact)
    return contact


def delete_contact(db: Session, contact_id: int) -> bool:
    contact = db.get(EmailContact, contact_id)
    if contact is None:
        return False

    db.delete(contact)
    db.commit()
    return True
