"""
Modèles SQLAlchemy pour les élèves et leurs contacts email (parents, tuteurs).
"""

from sqlalchemy import Column, ForeignKey, Integer, String

from app.database import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, autoincrement=True)
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    google_drive_url = Column(String(500), nullable=True, default="")


class EmailContact(Base):
    """Destinataire des bulletins d'un élève. Un élève peut en avoir plusieurs."""
    __tablename__ = "email_contacts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False)
    email = Column(String(255), nullable=False)
    contact_name = Column(String(255), nullable=False)
    relationship = Column(String(100), nullable=True, default="")  # Mère, Père, Tuteur...
