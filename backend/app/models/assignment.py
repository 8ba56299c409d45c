"""
Modèle SQLAlchemy pour les devoirs/évaluations d'une classe.
"""

from sqlalchemy import Column, Date, ForeignKey, Integer, String, Text

from app.database import Base


class Assignment(Base):
    __tablename__ = "assignments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False)
    label = Column(String(255), nullable=False)
    date = Column(Date, nullable=False)
    description = Column(Text, nullable=True, default="")
