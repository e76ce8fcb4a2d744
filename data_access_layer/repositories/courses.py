"""
Accès aux données des cours (table Courses).
Le CourseID est fourni par le client : un doublon lève DuplicateRecord.
"""

import logging
from typing import List

from sqlalchemy import delete as sql_delete, select
from sqlalchemy.orm import Session

from data_access_layer.exceptions import DuplicateRecord, IdentityMismatch, RecordNotFound, RecordValidationError
from data_access_layer.models.course import Course
from data_access_layer.models.enrollment import Enrollment
from data_access_layer.repositories.base import conditional_update, delete_row, insert_row, require_fields
from data_access_layer.schemas.course import CourseCreate, CourseUpdate

logger = logging.getLogger(__name__)

ENTITY = "Cours"


def _values(data: CourseCreate) -> dict:
    values = {"title": data.title, "credits": data.credits}
    require_fields(ENTITY, values)
    return values


def fetch_all(db: Session) -> List[Course]:
    """Retourne tous les cours triés par CourseID croissant."""
    return db.execute(select(Course).order_by(Course.id)).scalars().all()


def fetch_by_id(db: Session, course_id: int) -> Course:
    course = db.get(Course, course_id)
    if course is None:
        raise RecordNotFound(ENTITY, course_id)
    return course


def exists(db: Session, course_id: int) -> bool:
    return db.execute(select(Course.id).where(Course.id == course_id)).first() is not None


def insert(db: Session, data: CourseCreate) -> Course:
    require_fields(ENTITY, {"id": data.id})
    if exists(db, data.id):
        raise DuplicateRecord(f"Un cours avec le CourseID {data.id} existe déjà.")

    try:
        course = insert_row(db, ENTITY, Course(id=data.id, **_values(data), version=1))
    except RecordValidationError:
        # Un autre écrivain a pu insérer le même CourseID entre la vérification et l'INSERT
        if exists(db, data.id):
            raise DuplicateRecord(f"Un cours avec le CourseID {data.id} existe déjà.")
        raise
    logger.info("Cours créé : %s (%s)", course.title, course.id)
    return course


def replace(db: Session, course_id: int, data: CourseUpdate) -> Course:
    if data.id != course_id:
        raise IdentityMismatch(course_id, data.id)

    conditional_update(db, Course, ENTITY, course_id, _values(data), data.version)
    logger.info("Cours mis à jour : %s", course_id)
    return fetch_by_id(db, course_id)


def delete(db: Session, course_id: int) -> Course:
    """Supprime un cours et toutes ses inscriptions (une seule transaction)."""
    course = delete_row(
        db, Course, ENTITY, course_id,
        cascades=[sql_delete(Enrollment).where(Enrollment.course_id == course_id)],
    )
    logger.info("Cours supprimé : %s (inscriptions supprimées en cascade)", course_id)
    return course
