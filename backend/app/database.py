"""
Configuration de la connexion à la base de données.
SQLite par défaut ; les clés étrangères sont activées à chaque connexion
pour que les suppressions en cascade fonctionnent.
"""

from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import sessionmaker

from app.config import settings

# check_same_thread n'est nécessaire que pour SQLite (FastAPI exécute les routes sync dans un pool de threads)
engine_args = {"connect_args": {"check_same_thread": False}} if settings.DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(settings.DATABASE_URL, **engine_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def enable_sqlite_foreign_keys(engine) -> None:
    """Active PRAGMA foreign_keys sur chaque nouvelle connexion SQLite du moteur."""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


enable_sqlite_foreign_keys(engine)


def init_db() -> None:
    """Crée les tables manquantes (appelé au démarrage de l'API)."""
    import app.models  # noqa: F401  (enregistre tous les modèles dans Base.metadata)

    Base.metadata.create_all(bind=engine)


def get_db():
    """Dépendance FastAPI : fournit une session BDD et la ferme après usage."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
