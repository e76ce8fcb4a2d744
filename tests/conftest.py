"""
Configuration partagée pour tous les tests.

- `client`    : client HTTP avec une session BDD mockée (aucune connexion réelle).
- `db_session`: session SQLAlchemy sur une base SQLite en mémoire, tables créées.
- `db_client` : client HTTP branché sur cette même base SQLite.
"""

import os

# Doit précéder l'import de l'application : le moteur est créé à l'import.
os.environ["DATABASE_URL"] = "sqlite://"

from unittest.mock import MagicMock  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import data_access_layer.models  # noqa: E402,F401
from data_access_layer.database import Base, enable_sqlite_foreign_keys, get_db  # noqa: E402
from data_access_layer.main import app  # noqa: E402


@pytest.fixture
def client():
    """Client HTTP de test avec la BDD mockée."""
    mock_db = MagicMock()
    app.dependency_overrides[get_db] = lambda: mock_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def db_engine():
    """Base SQLite en mémoire partagée par toutes les sessions d'un test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def db_client(session_factory):
    """Client HTTP de test branché sur la base SQLite en mémoire."""
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def seed(session_factory):
    """Insère directement des lignes (en dehors du code testé) et retourne leurs IDs."""
    def _seed(*rows):
        db = session_factory()
        try:
            db.add_all(rows)
            db.commit()
            return [row.id for row in rows]
        finally:
            db.close()
    return _seed

