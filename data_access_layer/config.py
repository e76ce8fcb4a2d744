"""
Configuration centrale de l'application via variables d'environnement.
Charger depuis un fichier .env en développement.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url

LOCAL_HOSTS = {"localhost", "127.0.0.1", "::1"}


class Settings(BaseSettings):
    # Base de données
    DATABASE_URL: str = "postgresql://localhost:5432/DataAccessLayerDatabase"

    # Journalise chaque requête SQL émise par le moteur (echo SQLAlchemy), en développement seulement
    LOG_SQL_STATEMENTS: bool = False

    # Crée les tables manquantes au démarrage (pas de migrations gérées ici)
    CREATE_TABLES_ON_STARTUP: bool = True

    # Environnement
    ENV: str = "development"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("DATABASE_URL")
    @classmethod
    def normalize_url(cls, v: str) -> str:
        """
        Les hébergeurs fournissent souvent postgres://, que SQLAlchemy refuse.
        Un serveur PostgreSQL distant est joint en SSL (sslmode=require)
        sauf si l'URL précise déjà un sslmode.
        """
        if v.startswith("postgres://"):
            v = "postgresql://" + v[len("postgres://"):]

        url = make_url(v)
        if (
            url.get_backend_name() == "postgresql"
            and url.host
            and url.host not in LOCAL_HOSTS
            and "sslmode" not in url.query
        ):
            v += ("&" if "?" in v else "?") + "sslmode=require"
        return v

    @property
    def sql_echo(self) -> bool:
        return self.LOG_SQL_STATEMENTS and self.ENV == "development"


settings = Settings()
