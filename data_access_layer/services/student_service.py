"""
Service métier pour les élèves : orchestration CRUD et classement des issues
de la couche d'accès aux données.

Mise à jour :
1. Identité URL/corps vérifiée avant toute écriture → IdentityMismatch (400)
2. Écriture conditionnelle sur la version
3. Conflit de concurrence → on revérifie l'existence :
   - l'élève a disparu → RecordNotFound (404), il a été supprimé entre-temps
   - l'élève existe toujours → le conflit est relevé tel quel (409), sans nouvel essai
"""

import logging
from typing import List, Tuple

from sqlalchemy.orm import Session

from data_access_layer.exceptions import ConcurrencyConflict, RecordNotFound
from data_access_layer.models.course import Course
from data_access_layer.models.enrollment import Enrollment
from data_access_layer.models.student import Student
from data_access_layer.repositories import enrollments, students
from data_access_layer.schemas.enrollment import CourseRef, EnrollmentResponse
from data_access_layer.schemas.student import StudentCreate, StudentResponse, StudentUpdate

logger = logging.getLogger(__name__)


def get_students(db: Session) -> List[StudentResponse]:
    """Retourne tous les élèves triés par ID, avec leurs inscriptions."""
    return [_build_response(s, rows) for s, rows in enrollments.fetch_students_with_enrollments(db)]


def get_student(db: Session, student_id: int) -> StudentResponse:
    """Retourne un élève par son ID. Lève RecordNotFound s'il n'existe pas."""
    return _to_response(db, students.fetch_by_id(db, student_id))


def create_student(db: Session, data: StudentCreate) -> StudentResponse:
    student = students.insert(db, data)
    return _build_response(student, [])


def update_student(db: Session, student_id: int, data: StudentUpdate) -> StudentResponse:
    """Remplace intégralement un élève (voir le déroulé en tête de module)."""
    try:
        student = students.replace(db, student_id, data)
    except ConcurrencyConflict:
        if not students.exists(db, student_id):
            logger.info("Élève %s supprimé pendant sa mise à jour", student_id)
            raise RecordNotFound(students.ENTITY, student_id)
        raise
    return _to_response(db, student)


def delete_student(db: Session, student_id: int) -> StudentResponse:
    """
    Supprime un élève et ses inscriptions.
    Retourne l'état de l'élève tel qu'il était avant la suppression.
    """
    snapshot = get_student(db, student_id)
    students.delete(db, student_id)
    return snapshot


def _to_response(db: Session, student: Student) -> StudentResponse:
    grouped = enrollments.fetch_for_students(db, [student.id])
    return _build_response(student, grouped[student.id])


def _build_response(student: Student, rows: List[Tuple[Enrollment, Course]]) -> StudentResponse:
    """Construit la réponse ; Student est null dans les inscriptions (c'est l'élève englobant)."""
    return StudentResponse(
        id=student.id,
        last_name=student.last_name,
        first_mid_name=student.first_mid_name,
        enrollment_date=student.enrollment_date,
        version=student.version,
        enrollments=[
            EnrollmentResponse(
                id=enrollment.id,
                course_id=enrollment.course_id,
                student_id=enrollment.student_id,
                grade=enrollment.grade,
                version=enrollment.version,
                course=CourseRef(id=course.id, title=course.title, credits=course.credits),
            )
            for enrollment, course in rows
        ],
    )
