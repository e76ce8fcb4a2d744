"""
Service métier pour les cours. Même protocole que les élèves :
un conflit de concurrence devient RecordNotFound si le cours a disparu,
sinon il est relevé tel quel.
"""

import logging
from typing import List, Tuple

from sqlalchemy.orm import Session

from data_access_layer.exceptions import ConcurrencyConflict, RecordNotFound
from data_access_layer.models.course import Course
from data_access_layer.models.enrollment import Enrollment
from data_access_layer.models.student import Student
from data_access_layer.repositories import courses, enrollments
from data_access_layer.schemas.course import CourseCreate, CourseResponse, CourseUpdate
from data_access_layer.schemas.enrollment import EnrollmentResponse, StudentRef

logger = logging.getLogger(__name__)


def get_courses(db: Session) -> List[CourseResponse]:
    return [_build_response(c, rows) for c, rows in enrollments.fetch_courses_with_enrollments(db)]


def get_course(db: Session, course_id: int) -> CourseResponse:
    return _to_response(db, courses.fetch_by_id(db, course_id))


def create_course(db: Session, data: CourseCreate) -> CourseResponse:
    """Crée un cours. Lève DuplicateRecord si le CourseID est déjà pris."""
    return _build_response(courses.insert(db, data), [])


def update_course(db: Session, course_id: int, data: CourseUpdate) -> CourseResponse:
    try:
        course = courses.replace(db, course_id, data)
    except ConcurrencyConflict:
        if not courses.exists(db, course_id):
            logger.info("Cours %s supprimé pendant sa mise à jour", course_id)
            raise RecordNotFound(courses.ENTITY, course_id)
        raise
    return _to_response(db, course)


def delete_course(db: Session, course_id: int) -> CourseResponse:
    """Supprime un cours et ses inscriptions ; retourne l'état d'avant suppression."""
    snapshot = get_course(db, course_id)
    courses.delete(db, course_id)
    return snapshot


def _to_response(db: Session, course: Course) -> CourseResponse:
    grouped = enrollments.fetch_for_courses(db, [course.id])
    return _build_response(course, grouped[course.id])


def _build_response(course: Course, rows: List[Tuple[Enrollment, Student]]) -> CourseResponse:
    return CourseResponse(
        id=course.id,
        title=course.title,
        credits=course.credits,
        version=course.version,
        enrollments=[
            EnrollmentResponse(
                id=enrollment.id,
                course_id=enrollment.course_id,
                student_id=enrollment.student_id,
                grade=enrollment.grade,
                version=enrollment.version,
                student=StudentRef(
                    id=student.id,
                    last_name=student.last_name,
                    first_mid_name=student.first_mid_name,
                    enrollment_date=student.enrollment_date,
                ),
            )
            for enrollment, student in rows
        ],
    )
