"""
Schémas Pydantic pour le publipostage des bulletins par email.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from app.schemas.student import EmailContactResponse, StudentResponse


class EmailTemplate(BaseModel):
    """Modèle de message partagé, personnalisé par élève via les champs {{...}}."""
    subject: str
    message: str
    include_grades: bool = True
    selected_assignments: List[int] = Field(default_factory=list)  # vide = tous les devoirs

    @field_validator("subject", "message")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("L'objet et le message sont obligatoires.")
        return v


class EmailRecipient(BaseModel):
    """Un élève et l'ensemble de ses contacts : un seul message par élève."""
    student: StudentResponse
    contacts: List[EmailContactResponse] = Field(default_factory=list)


class EmailSendRequest(BaseModel):
    """Corps de requête pour POST /api/v1/emails/send."""
    student_ids: List[int]
    template: EmailTemplate

    @field_validator("student_ids")
    @classmethod
    def not_empty(cls, v: List[int]) -> List[int]:
        if not v:
            raise ValueError("Sélectionnez au moins un élève.")
        return v


class EmailSendResult(BaseModel):
    """
    Rapport d'envoi d'un lot.
    sent_count n'est renseigné qu'en cas de succès complet.
    """
    success: bool
    sent_count: Optional[int] = None
    error: Optional[str] = None
