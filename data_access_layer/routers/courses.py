"""
Router pour les cours (/api/Course).
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session

from data_access_layer.database import get_db
from data_access_layer.exceptions import (
    ConcurrencyConflict,
    DuplicateRecord,
    IdentityMismatch,
    RecordNotFound,
    RecordValidationError,
)
from data_access_layer.schemas.course import CourseCreate, CourseResponse, CourseUpdate
from data_access_layer.services import course_service

router = APIRouter(prefix="/api/Course", tags=["Cours"])


@router.get("", response_model=List[CourseResponse], summary="Lister les cours")
def list_courses(db: Session = Depends(get_db)):
    return course_service.get_courses(db)


@router.get("/{course_id}", response_model=CourseResponse, summary="Détail d'un cours")
def get_course(course_id: int, db: Session = Depends(get_db)):
    try:
        return course_service.get_course(db, course_id)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{course_id}", response_model=CourseResponse, summary="Remplacer un cours")
def update_course(course_id: int, data: CourseUpdate, db: Session = Depends(get_db)):
    try:
        return course_service.update_course(db, course_id, data)
    except (IdentityMismatch, RecordValidationError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConcurrencyConflict as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("", response_model=CourseResponse, status_code=201, summary="Créer un cours")
def create_course(data: CourseCreate, request: Request, response: Response, db: Session = Depends(get_db)):
    """Crée un cours avec le CourseID fourni par le client."""
    try:
        course = course_service.create_course(db, data)
    except DuplicateRecord as e:
        raise HTTPException(status_code=409, detail=str(e))
    except RecordValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    response.headers["Location"] = str(request.url_for("get_course", course_id=course.id))
    return course


@router.delete("/{course_id}", response_model=CourseResponse, summary="Supprimer un cours")
def delete_course(course_id: int, db: Session = Depends(get_db)):
    """Supprime un cours ; toutes ses inscriptions sont supprimées avec lui."""
    try:
        return course_service.delete_course(db, course_id)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
