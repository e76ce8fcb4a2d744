"""
Configuration de la connexion à la base de données.
PostgreSQL en production ; SQLite accepté en développement et pour les tests.
"""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import sessionmaker

from data_access_layer.config import settings


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """SQLite n'applique les clés étrangères (et ON DELETE CASCADE) qu'après ce PRAGMA."""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_engine(settings.DATABASE_URL, echo=settings.sql_echo)
enable_sqlite_foreign_keys(engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Dépendance FastAPI — fournit une session BDD par requête et la ferme après usage."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
