"""
Schémas Pydantic pour les devoirs.

Note : on importe datetime en tant que module (dt) pour éviter le conflit de nommage
entre le champ `date` et le type `datetime.date` dans Pydantic v2.
"""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, field_validator


class AssignmentCreate(BaseModel):
    class_id: int
    label: str
    date: dt.date
    description: Optional[str] = ""

    @field_validator("label")
    @classmethod
    def label_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("L'intitulé du devoir ne peut pas être vide.")
        return v.strip()


class AssignmentUpdate(BaseModel):
    class_id: Optional[int] = None
    label: Optional[str] = None
    date: Optional[dt.date] = None
    description: Optional[str] = None

    @field_validator("label")
    @classmethod
    def label_not_empty(cls, v: Optional[str]) -> str:
        if v is None or not v.strip():
            raise ValueError("L'intitulé du devoir ne peut pas être vide.")
        return v.strip()

    @field_validator("class_id", "date")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("Ce champ ne peut pas être nul.")
        return v


class AssignmentResponse(BaseModel):
    id: int
    class_id: int
    label: str
    date: dt.date
    description: Optional[str]

    model_config = {"from_attributes": True}
