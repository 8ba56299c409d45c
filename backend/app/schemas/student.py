"""
Schémas Pydantic pour les élèves et leurs contacts email.
"""

from typing import Optional

from pydantic import BaseModel, EmailStr, field_validator


class StudentCreate(BaseModel):
    """Schéma de création d'un élève dans une classe."""
    class_id: int
    first_name: str
    last_name: str
    google_drive_url: Optional[str] = ""

    @field_validator("first_name", "last_name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le champ ne peut pas être vide.")
        return v.strip()


class StudentUpdate(BaseModel):
    """Schéma de mise à jour partielle d'un élève (PUT /students/{id})."""
    class_id: Optional[int] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    google_drive_url: Optional[str] = None

    @field_validator("class_id")
    @classmethod
    def class_required(cls, v: Optional[int]) -> int:
        if v is None:
            raise ValueError("Un élève doit appartenir à une classe.")
        return v

    @field_validator("first_name", "last_name")
    @classmethod
    def not_empty(cls, v: Optional[str]) -> str:
        # Champs facultatifs mais jamais nuls : null explicite refusé
        if v is None or not v.strip():
            raise ValueError("Le champ ne peut pas être vide.")
        return v.strip()


class StudentResponse(BaseModel):
    id: int
    class_id: int
    first_name: str
    last_name: str
    google_drive_url: Optional[str]

    model_config = {"from_attributes": True}


class EmailContactCreate(BaseModel):
    email: EmailStr
    contact_name: str
    relationship: Optional[str] = ""

    @field_validator("contact_name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le nom du contact ne peut pas être vide.")
        return v.strip()


class EmailContactUpdate(BaseModel):
    email: Optional[EmailStr] = None
    contact_name: Optional[str] = None
    relationship: Optional[str] = None

    @field_validator("email")
    @classmethod
    def email_required(cls, v):
        if v is None:
            raise ValueError("L'adresse email ne peut pas être vide.")
        return v

    @field_validator("contact_name")
    @classmethod
    def not_empty(cls, v: Optional[str]) -> str:
        if v is None or not v.strip():
            raise ValueError("Le nom du contact ne peut pas être vide.")
        return v.strip()


class EmailContactResponse(BaseModel):
    id: int
    student_id: int
    email: str
    contact_name: str
    relationship: Optional[str]

    model_config = {"from_attributes": True}
