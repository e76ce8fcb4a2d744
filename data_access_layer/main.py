"""
Point d'entrée principal de l'API Data Access Layer (élèves, cours, inscriptions).
Démarrage : uvicorn data_access_layer.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import data_access_layer.models  # noqa: F401 — enregistre tous les modèles dans Base.metadata avant les routers
from data_access_layer.config import settings
from data_access_layer.database import Base, engine
from data_access_layer.routers import courses, enrollments, students

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Cycle de vie de l'application : crée les tables manquantes au démarrage si demandé."""
    if settings.CREATE_TABLES_ON_STARTUP:
        Base.metadata.create_all(bind=engine)
        logger.info("Tables Students, Courses et Enrollments vérifiées.")
    yield
    engine.dispose()


app = FastAPI(
    title="Data Access Layer API",
    description="API CRUD pour les élèves, les cours et leurs inscriptions",
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# CORS — autorise tous les ports localhost en développement (le client React tourne à part).
app.add_middleware(
    CORSMiddleware,
    allow_origins=[],
    allow_origin_regex=r"https?://(localhost|127\.0\.0\.1)(:\d+)?",
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Accept"],
)


app.include_router(students.router)
app.include_router(courses.router)
app.include_router(enrollments.router)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Intercepte toutes les exceptions non gérées (erreurs de stockage comprises)
    pour renvoyer une 500 JSON qui passe bien par CORSMiddleware.
    Aucune nouvelle tentative : c'est au client de resoumettre.
    """
    logger.error("Exception non gérée : %s", exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Une erreur interne est survenue."},
    )


@app.get("/api/health", tags=["Santé"])
def health_check():
    """Vérifie que l'API est opérationnelle."""
    return {"status": "ok", "service": "Data Access Layer API", "version": "0.1.0"}
