"""
Router pour les élèves.
GET    /api/Student       — liste triée par ID, avec inscriptions
GET    /api/Student/{id}  — détail
POST   /api/Student       — création (201 + en-tête Location)
PUT    /api/Student/{id}  — remplacement complet
DELETE /api/Student/{id}  — suppression (cascade sur les inscriptions)
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session

from data_access_layer.database import get_db
from data_access_layer.exceptions import ConcurrencyConflict, IdentityMismatch, RecordNotFound, RecordValidationError
from data_access_layer.schemas.student import StudentCreate, StudentResponse, StudentUpdate
from data_access_layer.services import student_service

router = APIRouter(prefix="/api/Student", tags=["Élèves"])


@router.get("", response_model=List[StudentResponse], summary="Lister les élèves")
def list_students(db: Session = Depends(get_db)):
    """Retourne tous les élèves triés par ID croissant."""
    return student_service.get_students(db)


@router.get("/{student_id}", response_model=StudentResponse, summary="Détail d'un élève")
def get_student(student_id: int, db: Session = Depends(get_db)):
    try:
        return student_service.get_student(db, student_id)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{student_id}", response_model=StudentResponse, summary="Remplacer un élève")
def update_student(student_id: int, data: StudentUpdate, db: Session = Depends(get_db)):
    """
    Remplace toutes les valeurs de l'élève par celles du corps de requête.
    400 si l'ID du corps diffère de l'URL, 404 si l'élève a été supprimé,
    409 s'il a été modifié par une autre requête.
    """
    try:
        return student_service.update_student(db, student_id, data)
    except (IdentityMismatch, RecordValidationError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConcurrencyConflict as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("", response_model=StudentResponse, status_code=201, summary="Créer un élève")
def create_student(data: StudentCreate, request: Request, response: Response, db: Session = Depends(get_db)):
    """Crée un élève ; l'ID est généré par la base."""
    try:
        student = student_service.create_student(db, data)
    except RecordValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    response.headers["Location"] = str(request.url_for("get_student", student_id=student.id))
    return student


@router.delete("/{student_id}", response_model=StudentResponse, summary="Supprimer un élève")
def delete_student(student_id: int, db: Session = Depends(get_db)):
    """Supprime un élève et ses inscriptions, puis renvoie l'élève supprimé."""
    try:
        return student_service.delete_student(db, student_id)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
