"""
Tests de la couche d'accès aux données des cours (CourseID fourni par le client).
"""

import pytest
from sqlalchemy import select

from data_access_layer.exceptions import (
    ConcurrencyConflict,
    DuplicateRecord,
    IdentityMismatch,
    RecordNotFound,
)
from data_access_layer.models.enrollment import Enrollment
from data_access_layer.repositories import courses
from data_access_layer.schemas.course import CourseCreate, CourseUpdate
from data_access_layer.services import course_service
from factories import make_course_row, make_enrollment_row, make_student_row


def test_insert_garde_le_course_id_fourni(db_session):
    course = courses.insert(db_session, CourseCreate(id=1050, title="Chemistry", credits=3))
    assert course.id == 1050
    assert course.version == 1


def test_insert_course_id_duplique(db_session, seed):
    seed(make_course_row(id=1050))
    with pytest.raises(DuplicateRecord, match="1050"):
        courses.insert(db_session, CourseCreate(id=1050, title="Autre", credits=1))


def test_fetch_all_trie_par_course_id(db_session, seed):
    seed(make_course_row(id=4041), make_course_row(id=1045), make_course_row(id=3141))
    assert [c.id for c in courses.fetch_all(db_session)] == [1045, 3141, 4041]


def test_credits_negatifs_rejetes():
    with pytest.raises(ValueError):
        CourseCreate(id=1, title="Chemistry", credits=-1)


def test_replace_identite_differente(db_session, seed):
    seed(make_course_row(id=1050))
    with pytest.raises(IdentityMismatch):
        courses.replace(db_session, 1050, CourseUpdate(id=2021, title="Composition", credits=3))


def test_replace_version_perimee(db_session, seed):
    seed(make_course_row(id=1050, version=3))
    with pytest.raises(ConcurrencyConflict):
        courses.replace(db_session, 1050, CourseUpdate(id=1050, title="Chemistry II", credits=4, version=2))

    updated = courses.replace(db_session, 1050, CourseUpdate(id=1050, title="Chemistry II", credits=4, version=3))
    assert updated.title == "Chemistry II"
    assert updated.version == 4


def test_update_course_supprime_devient_introuvable(db_session):
    with pytest.raises(RecordNotFound):
        course_service.update_course(db_session, 1050, CourseUpdate(id=1050, title="Chemistry", credits=3))


def test_delete_course_cascade(db_session, seed):
    (sid,) = seed(make_student_row())
    seed(make_course_row(id=1050), make_course_row(id=4022, title="Microeconomics"))
    seed(
        make_enrollment_row(course_id=1050, student_id=sid),
        make_enrollment_row(course_id=4022, student_id=sid),
    )

    snapshot = course_service.delete_course(db_session, 1050)

    assert snapshot.id == 1050
    assert len(snapshot.enrollments) == 1
    assert snapshot.enrollments[0].student.id == sid
    assert db_session.execute(select(Enrollment.course_id)).scalars().all() == [4022]
    assert courses.exists(db_session, 1050) is False
