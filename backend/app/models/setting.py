"""
Modèle SQLAlchemy pour les paramètres clé/valeur (configuration SMTP).
"""

from sqlalchemy import Column, Integer, String, Text

from app.database import Base


class Setting(Base):
    __tablename__ = "settings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    key = Column(String(100), unique=True, nullable=False)
    value = Column(Text, nullable=False)
