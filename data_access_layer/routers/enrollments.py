"""
Router pour les inscriptions (/api/Enrollment).
Une inscription ne peut référencer qu'un cours et un élève existants (400 sinon).
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session

from data_access_layer.database import get_db
from data_access_layer.exceptions import (
    ConcurrencyConflict,
    IdentityMismatch,
    RecordNotFound,
    RecordValidationError,
)
from data_access_layer.schemas.enrollment import EnrollmentCreate, EnrollmentResponse, EnrollmentUpdate
from data_access_layer.services import enrollment_service

router = APIRouter(prefix="/api/Enrollment", tags=["Inscriptions"])


@router.get("", response_model=List[EnrollmentResponse], summary="Lister les inscriptions")
def list_enrollments(db: Session = Depends(get_db)):
    return enrollment_service.get_enrollments(db)


@router.get("/{enrollment_id}", response_model=EnrollmentResponse, summary="Détail d'une inscription")
def get_enrollment(enrollment_id: int, db: Session = Depends(get_db)):
    try:
        return enrollment_service.get_enrollment(db, enrollment_id)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{enrollment_id}", response_model=EnrollmentResponse, summary="Remplacer une inscription")
def update_enrollment(enrollment_id: int, data: EnrollmentUpdate, db: Session = Depends(get_db)):
    try:
        return enrollment_service.update_enrollment(db, enrollment_id, data)
    except (IdentityMismatch, RecordValidationError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConcurrencyConflict as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("", response_model=EnrollmentResponse, status_code=201, summary="Créer une inscription")
def create_enrollment(data: EnrollmentCreate, request: Request, response: Response, db: Session = Depends(get_db)):
    try:
        enrollment = enrollment_service.create_enrollment(db, data)
    except RecordValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    response.headers["Location"] = str(request.url_for("get_enrollment", enrollment_id=enrollment.id))
    return enrollment


@router.delete("/{enrollment_id}", response_model=EnrollmentResponse, summary="Supprimer une inscription")
def delete_enrollment(enrollment_id: int, db: Session = Depends(get_db)):
    try:
        return enrollment_service.delete_enrollment(db, enrollment_id)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
