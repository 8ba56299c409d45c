"""
Modèle SQLAlchemy pour les notes.

Au plus une note par couple (élève, devoir) : contrainte UNIQUE en base,
et la grille de notes choisit toujours entre mise à jour et création.
"""

from sqlalchemy import Column, ForeignKey, Integer, String, Text, UniqueConstraint

from app.database import Base


class Grade(Base):
    __tablename__ = "grades"
    __table_args__ = (
        UniqueConstraint("student_id", "assignment_id", name="uq_grades_student_assignment"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False)
    assignment_id = Column(Integer, ForeignKey("assignments.id", ondelete="CASCADE"), nullable=False)
    grade = Column(String(50), nullable=False)  # Texte libre : "A-", "15/20", "Absent"...
    notes = Column(Text, nullable=True, default="")
