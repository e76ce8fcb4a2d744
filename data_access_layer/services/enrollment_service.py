"""
Service métier pour les inscriptions.
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from data_access_layer.exceptions import ConcurrencyConflict, RecordNotFound
from data_access_layer.models.course import Course
from data_access_layer.models.enrollment import Enrollment
from data_access_layer.models.student import Student
from data_access_layer.repositories import enrollments
from data_access_layer.schemas.enrollment import (
    CourseRef,
    EnrollmentCreate,
    EnrollmentResponse,
    EnrollmentUpdate,
    StudentRef,
)

logger = logging.getLogger(__name__)


def get_enrollments(db: Session) -> List[EnrollmentResponse]:
    return [_build_response(e, c, s) for e, c, s in enrollments.fetch_all_with_parents(db)]


def get_enrollment(db: Session, enrollment_id: int) -> EnrollmentResponse:
    return _build_response(*enrollments.fetch_with_parents(db, enrollment_id))


def create_enrollment(db: Session, data: EnrollmentCreate) -> EnrollmentResponse:
    """Crée une inscription. Lève RecordValidationError si le cours ou l'élève n'existe pas."""
    enrollment = enrollments.insert(db, data)
    return get_enrollment(db, enrollment.id)


def update_enrollment(db: Session, enrollment_id: int, data: EnrollmentUpdate) -> EnrollmentResponse:
    try:
        enrollments.replace(db, enrollment_id, data)
    except ConcurrencyConflict:
        if not enrollments.exists(db, enrollment_id):
            logger.info("Inscription %s supprimée pendant sa mise à jour", enrollment_id)
            raise RecordNotFound(enrollments.ENTITY, enrollment_id)
        raise
    return get_enrollment(db, enrollment_id)


def delete_enrollment(db: Session, enrollment_id: int) -> EnrollmentResponse:
    snapshot = get_enrollment(db, enrollment_id)
    enrollments.delete(db, enrollment_id)
    return snapshot


def _build_response(enrollment: Enrollment, course: Course, student: Student) -> EnrollmentResponse:
    return EnrollmentResponse(
        id=enrollment.id,
        course_id=enrollment.course_id,
        student_id=enrollment.student_id,
        grade=enrollment.grade,
        version=enrollment.version,
        course=CourseRef(id=course.id, title=course.title, credits=course.credits),
        student=StudentRef(
            id=student.id,
            last_name=student.last_name,
            first_mid_name=student.first_mid_name,
            enrollment_date=student.enrollment_date,
        ),
    )
