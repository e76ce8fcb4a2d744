"""
Accès aux données des élèves (table Students).
"""

import logging
from typing import List

from sqlalchemy import delete as sql_delete, select
from sqlalchemy.orm import Session

from data_access_layer.exceptions import IdentityMismatch, RecordNotFound
from data_access_layer.models.enrollment import Enrollment
from data_access_layer.models.student import Student
from data_access_layer.repositories.base import conditional_update, delete_row, insert_row, require_fields
from data_access_layer.schemas.student import StudentCreate, StudentUpdate

logger = logging.getLogger(__name__)

ENTITY = "Élève"


def _values(data: StudentCreate) -> dict:
    values = {
        "last_name": data.last_name,
        "first_mid_name": data.first_mid_name,
        "enrollment_date": data.enrollment_date,
    }
    require_fields(ENTITY, values)
    return values


def fetch_all(db: Session) -> List[Student]:
    """Retourne tous les élèves triés par ID croissant."""
    return db.execute(select(Student).order_by(Student.id)).scalars().all()


def fetch_by_id(db: Session, student_id: int) -> Student:
    student = db.get(Student, student_id)
    if student is None:
        raise RecordNotFound(ENTITY, student_id)
    return student


def exists(db: Session, student_id: int) -> bool:
    return db.execute(select(Student.id).where(Student.id == student_id)).first() is not None


def insert(db: Session, data: StudentCreate) -> Student:
    """Insère un élève ; l'ID éventuellement fourni est ignoré, la base le génère."""
    student = insert_row(db, ENTITY, Student(**_values(data), version=1))
    logger.info("Élève créé : %s %s (%s)", student.first_mid_name, student.last_name, student.id)
    return student


def replace(db: Session, student_id: int, data: StudentUpdate) -> Student:
    """
    Remplace intégralement l'élève `student_id` par `data`.
    L'identité est vérifiée avant tout accès à la base.
    """
    if data.id != student_id:
        raise IdentityMismatch(student_id, data.id)

    conditional_update(db, Student, ENTITY, student_id, _values(data), data.version)
    logger.info("Élève mis à jour : %s", student_id)
    return fetch_by_id(db, student_id)


def delete(db: Session, student_id: int) -> Student:
    """Supprime un élève et toutes ses inscriptions (une seule transaction)."""
    student = delete_row(
        db, Student, ENTITY, student_id,
        cascades=[sql_delete(Enrollment).where(Enrollment.student_id == student_id)],
    )
    logger.info("Élève supprimé : %s (inscriptions supprimées en cascade)", student_id)
    return student
