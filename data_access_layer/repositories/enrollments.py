"""
Accès aux données des inscriptions (table Enrollments).

Pas de chargement paresseux : les élèves et cours associés sont obtenus par
jointures explicites (fetch_students_with_enrollments, fetch_for_students,
fetch_with_parents, ...).
Une inscription n'est écrite que si son cours et son élève existent.
"""

import logging
from typing import Dict, Iterable, List, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session

from data_access_layer.exceptions import (
    ConcurrencyConflict,
    IdentityMismatch,
    RecordNotFound,
    RecordValidationError,
)
from data_access_layer.models.course import Course
from data_access_layer.models.enrollment import Enrollment
from data_access_layer.models.student import Student
from data_access_layer.repositories import courses, students
from data_access_layer.repositories.base import conditional_update, delete_row, insert_row, require_fields
from data_access_layer.schemas.enrollment import EnrollmentCreate, EnrollmentUpdate

logger = logging.getLogger(__name__)

ENTITY = "Inscription"


def _values(db: Session, data: EnrollmentCreate) -> dict:
    values = {"course_id": data.course_id, "student_id": data.student_id, "grade": data.grade}
    require_fields(ENTITY, {"course_id": data.course_id, "student_id": data.student_id})

    if not courses.exists(db, data.course_id):
        raise RecordValidationError(f"Cours {data.course_id} introuvable.")
    if not students.exists(db, data.student_id):
        raise RecordValidationError(f"Élève {data.student_id} introuvable.")
    return values


def fetch_all(db: Session) -> List[Enrollment]:
    """Retourne toutes les inscriptions triées par EnrollmentID croissant."""
    return db.execute(select(Enrollment).order_by(Enrollment.id)).scalars().all()


def fetch_by_id(db: Session, enrollment_id: int) -> Enrollment:
    enrollment = db.get(Enrollment, enrollment_id)
    if enrollment is None:
        raise RecordNotFound(ENTITY, enrollment_id)
    return enrollment


def exists(db: Session, enrollment_id: int) -> bool:
    return db.execute(select(Enrollment.id).where(Enrollment.id == enrollment_id)).first() is not None


def fetch_with_parents(db: Session, enrollment_id: int) -> Tuple[Enrollment, Course, Student]:
    """Retourne l'inscription avec son cours et son élève, en une seule requête."""
    row = db.execute(
        select(Enrollment, Course, Student)
        .join(Course, Course.id == Enrollment.course_id)
        .join(Student, Student.id == Enrollment.student_id)
        .where(Enrollment.id == enrollment_id)
    ).first()
    if row is None:
        raise RecordNotFound(ENTITY, enrollment_id)
    return row[0], row[1], row[2]


def fetch_all_with_parents(db: Session) -> List[Tuple[Enrollment, Course, Student]]:
    rows = db.execute(
        select(Enrollment, Course, Student)
        .join(Course, Course.id == Enrollment.course_id)
        .join(Student, Student.id == Enrollment.student_id)
        .order_by(Enrollment.id)
    ).all()
    return [(e, c, s) for e, c, s in rows]


def _group_by_parent(rows) -> list:
    """Regroupe des lignes (parent, inscription, autre) triées par parent ; inscription None si aucune."""
    grouped = []
    for parent, enrollment, other in rows:
        if not grouped or grouped[-1][0].id != parent.id:
            grouped.append((parent, []))
        if enrollment is not None:
            grouped[-1][1].append((enrollment, other))
    return grouped


def fetch_students_with_enrollments(db: Session) -> List[Tuple[Student, List[Tuple[Enrollment, Course]]]]:
    """
    Tous les élèves triés par ID, chacun avec ses inscriptions (triées) et leur cours.
    Une seule jointure externe, quel que soit le nombre d'élèves.
    """
    rows = db.execute(
        select(Student, Enrollment, Course)
        .outerjoin(Enrollment, Enrollment.student_id == Student.id)
        .outerjoin(Course, Course.id == Enrollment.course_id)
        .order_by(Student.id, Enrollment.id)
    ).all()
    return _group_by_parent(rows)


def fetch_courses_with_enrollments(db: Session) -> List[Tuple[Course, List[Tuple[Enrollment, Student]]]]:
    """Tous les cours triés par CourseID, chacun avec ses inscriptions et leur élève."""
    rows = db.execute(
        select(Course, Enrollment, Student)
        .outerjoin(Enrollment, Enrollment.course_id == Course.id)
        .outerjoin(Student, Student.id == Enrollment.student_id)
        .order_by(Course.id, Enrollment.id)
    ).all()
    return _group_by_parent(rows)


def fetch_for_students(db: Session, student_ids: Iterable[int]) -> Dict[int, List[Tuple[Enrollment, Course]]]:
    """
    Inscriptions des élèves demandés, groupées par StudentID et accompagnées de leur cours.
    Chaque élève demandé a une entrée, éventuellement vide.
    """
    grouped: Dict[int, List[Tuple[Enrollment, Course]]] = {sid: [] for sid in student_ids}
    if not grouped:
        return grouped

    rows = db.execute(
        select(Enrollment, Course)
        .join(Course, Course.id == Enrollment.course_id)
        .where(Enrollment.student_id.in_(list(grouped)))
        .order_by(Enrollment.id)
    ).all()
    for enrollment, course in rows:
        grouped[enrollment.student_id].append((enrollment, course))
    return grouped


def fetch_for_courses(db: Session, course_ids: Iterable[int]) -> Dict[int, List[Tuple[Enrollment, Student]]]:
    """Inscriptions des cours demandés, groupées par CourseID et accompagnées de leur élève."""
    grouped: Dict[int, List[Tuple[Enrollment, Student]]] = {cid: [] for cid in course_ids}
    if not grouped:
        return grouped

    rows = db.execute(
        select(Enrollment, Student)
        .join(Student, Student.id == Enrollment.student_id)
        .where(Enrollment.course_id.in_(list(grouped)))
        .order_by(Enrollment.id)
    ).all()
    for enrollment, student in rows:
        grouped[enrollment.course_id].append((enrollment, student))
    return grouped


def insert(db: Session, data: EnrollmentCreate) -> Enrollment:
    enrollment = insert_row(db, ENTITY, Enrollment(**_values(db, data), version=1))
    logger.info(
        "Inscription créée : %s (élève %s, cours %s)",
        enrollment.id, enrollment.student_id, enrollment.course_id,
    )
    return enrollment


def replace(db: Session, enrollment_id: int, data: EnrollmentUpdate) -> Enrollment:
    if data.id != enrollment_id:
        raise IdentityMismatch(enrollment_id, data.id)
    # Cible disparue : traitée comme un conflit, avant la validation des parents
    if not exists(db, enrollment_id):
        raise ConcurrencyConflict(ENTITY, enrollment_id)

    conditional_update(db, Enrollment, ENTITY, enrollment_id, _values(db, data), data.version)
    logger.info("Inscription mise à jour : %s", enrollment_id)
    return fetch_by_id(db, enrollment_id)


def delete(db: Session, enrollment_id: int) -> Enrollment:
    """Supprime uniquement l'inscription ; ses parents ne sont pas touchés."""
    enrollment = delete_row(db, Enrollment, ENTITY, enrollment_id)
    logger.info("Inscription supprimée : %s", enrollment_id)
    return enrollment
