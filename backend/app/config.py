"""
Configuration centrale de l'application via variables d'environnement.
Charger depuis un fichier .env en développement.

Les identifiants SMTP ne sont pas ici : ils sont saisis par l'enseignant
dans l'écran Paramètres et stockés dans la table settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Base de données (fichier SQLite local, application mono-utilisateur)
    DATABASE_URL: str = "sqlite:///./gradebook.db"

    # Valeurs par défaut SMTP quand la table settings ne les précise pas
    SMTP_DEFAULT_FROM_NAME: str = "PSIA Gradebook"
    SMTP_DEFAULT_HOST: str = "smtp.gmail.com"
    SMTP_DEFAULT_PORT: int = 587

    # Environnement
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = Settings()
