"""
Tests de la couche d'accès aux données des élèves sur une base SQLite en mémoire :
tri, aller-retour insert/lecture, verrou optimiste et suppression en cascade.
"""

from datetime import datetime
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.sql.dml import Delete

from data_access_layer.exceptions import (
    ConcurrencyConflict,
    IdentityMismatch,
    RecordNotFound,
    RecordValidationError,
)
from data_access_layer.models.enrollment import Enrollment
from data_access_layer.models.student import Student
from data_access_layer.repositories import students
from data_access_layer.schemas.student import StudentCreate, StudentUpdate
from data_access_layer.services import student_service
from factories import make_course_row, make_enrollment_row, make_student_row


def new_student(**kwargs) -> StudentCreate:
    return StudentCreate(
        last_name=kwargs.get("last_name", "Alexander"),
        first_mid_name=kwargs.get("first_mid_name", "Carson"),
        enrollment_date=kwargs.get("enrollment_date", datetime(2019, 9, 1)),
    )


def replacement(student_id, **kwargs) -> StudentUpdate:
    return StudentUpdate(
        id=student_id,
        last_name=kwargs.get("last_name", "Alonso"),
        first_mid_name=kwargs.get("first_mid_name", "Meredith"),
        enrollment_date=kwargs.get("enrollment_date", datetime(2020, 9, 1)),
        version=kwargs.get("version"),
    )


# --- Lecture ---

def test_fetch_all_trie_par_id(db_session, seed):
    """Le tri par ID croissant ne dépend pas de l'ordre d'insertion."""
    seed(make_student_row(id=7, last_name="Zed"))
    seed(make_student_row(id=2, last_name="Bee"))
    seed(make_student_row(id=5, last_name="Ay"))

    result = students.fetch_all(db_session)

    assert [s.id for s in result] == [2, 5, 7]


def test_fetch_by_id_introuvable(db_session):
    with pytest.raises(RecordNotFound):
        students.fetch_by_id(db_session, 42)


def test_exists(db_session, seed):
    (sid,) = seed(make_student_row())
    assert students.exists(db_session, sid) is True
    assert students.exists(db_session, sid + 1) is False


# --- Insertion ---

def test_insert_puis_lecture_aller_retour(db_session, session_factory):
    """Insert puis lecture : mêmes valeurs, ID désormais renseigné."""
    data = new_student()
    created = students.insert(db_session, data)
    assert created.id is not None
    assert created.version == 1

    other = session_factory()
    try:
        fetched = students.fetch_by_id(other, created.id)
        assert fetched.last_name == data.last_name
        assert fetched.first_mid_name == data.first_mid_name
        assert fetched.enrollment_date == data.enrollment_date
    finally:
        other.close()


def test_insert_ignore_id_fourni(db_session):
    data = StudentCreate(id=999, last_name="Alexander", first_mid_name="Carson", enrollment_date=datetime(2019, 9, 1))
    created = students.insert(db_session, data)
    assert created.id != 999


def test_insert_champ_obligatoire_manquant(db_session):
    data = StudentCreate.model_construct(last_name=None, first_mid_name="Carson", enrollment_date=datetime(2019, 9, 1))
    with pytest.raises(RecordValidationError, match="last_name"):
        students.insert(db_session, data)
    assert db_session.execute(select(func.count()).select_from(Student)).scalar() == 0


# --- Remplacement ---

def test_replace_identite_differente_sans_acces_bdd():
    """IdentityMismatch est levée avant tout accès à la base."""
    db = MagicMock()
    with pytest.raises(IdentityMismatch):
        students.replace(db, 1, replacement(2))
    db.execute.assert_not_called()
    db.get.assert_not_called()
    db.commit.assert_not_called()


def test_replace_sans_id_sans_acces_bdd():
    """Un corps sans ID ne correspond à aucun élève : IdentityMismatch, base intacte."""
    db = MagicMock()
    data = StudentUpdate.model_validate({
        "LastName": "Alonso",
        "FirstMidName": "Meredith",
        "EnrollmentDate": "2020-09-01",
    })
    assert data.id is None

    with pytest.raises(IdentityMismatch, match="absent"):
        students.replace(db, 1, data)
    db.execute.assert_not_called()


def test_replace_remplace_tous_les_champs(db_session, seed):
    (sid,) = seed(make_student_row())

    updated = students.replace(db_session, sid, replacement(sid))

    assert updated.last_name == "Alonso"
    assert updated.first_mid_name == "Meredith"
    assert updated.enrollment_date == datetime(2020, 9, 1)
    assert updated.version == 2


def test_replace_version_perimee_conflit(db_session, seed, session_factory):
    """Un autre écrivain a modifié l'élève depuis la lecture → ConcurrencyConflict."""
    (sid,) = seed(make_student_row())

    other = session_factory()
    try:
        students.replace(other, sid, replacement(sid, last_name="Autre", version=1))
    finally:
        other.close()

    with pytest.raises(ConcurrencyConflict):
        students.replace(db_session, sid, replacement(sid, version=1))

    assert students.fetch_by_id(db_session, sid).last_name == "Autre"


def test_replace_ligne_supprimee_conflit(db_session):
    with pytest.raises(ConcurrencyConflict):
        students.replace(db_session, 404, replacement(404))


def test_update_supprime_entre_temps_devient_introuvable(db_session, seed, session_factory):
    """Suppression concurrente entre lecture et mise à jour → RecordNotFound, jamais un conflit brut."""
    (sid,) = seed(make_student_row())

    other = session_factory()
    try:
        students.delete(other, sid)
    finally:
        other.close()

    with pytest.raises(RecordNotFound):
        student_service.update_student(db_session, sid, replacement(sid, version=1))


def test_update_modifie_entre_temps_releve_le_conflit(db_session, seed, session_factory):
    (sid,) = seed(make_student_row())

    other = session_factory()
    try:
        students.replace(other, sid, replacement(sid, last_name="Autre", version=1))
    finally:
        other.close()

    with pytest.raises(ConcurrencyConflict):
        student_service.update_student(db_session, sid, replacement(sid, version=1))


# --- Suppression ---

def test_delete_cascade_sur_les_inscriptions(db_session, seed):
    """Supprimer un élève supprime toutes ses inscriptions, pas celles des autres."""
    s1, s2 = seed(make_student_row(), make_student_row(last_name="Alonso"))
    seed(make_course_row(id=1050), make_course_row(id=4022, title="Microeconomics"))
    seed(
        make_enrollment_row(course_id=1050, student_id=s1),
        make_enrollment_row(course_id=4022, student_id=s1, grade=2),
        make_enrollment_row(course_id=1050, student_id=s2),
    )

    removed = students.delete(db_session, s1)

    assert removed.id == s1
    assert removed.last_name == "Alexander"
    remaining = db_session.execute(select(Enrollment.student_id)).scalars().all()
    assert remaining == [s2]
    assert students.exists(db_session, s1) is False


def test_delete_introuvable(db_session):
    with pytest.raises(RecordNotFound):
        students.delete(db_session, 12)


def test_delete_echec_apres_cascade_annule_tout(db_session, seed, session_factory):
    """La suppression du parent échoue après celle des inscriptions → rollback, aucune ligne orpheline ni perdue."""
    (sid,) = seed(make_student_row())
    seed(make_course_row(id=1050), make_course_row(id=4022, title="Microeconomics"))
    seed(
        make_enrollment_row(course_id=1050, student_id=sid),
        make_enrollment_row(course_id=4022, student_id=sid, grade=2),
    )

    real_execute = db_session.execute
    deletes = []

    def execute_then_fail(statement, *args, **kwargs):
        if isinstance(statement, Delete):
            deletes.append(statement)
            if len(deletes) == 2:
                raise OperationalError("DELETE", {}, Exception("disque plein"))
        return real_execute(statement, *args, **kwargs)

    with patch.object(db_session, "execute", side_effect=execute_then_fail):
        with pytest.raises(OperationalError):
            students.delete(db_session, sid)

    # La cascade a bien été exécutée avant l'échec du DELETE parent
    assert len(deletes) == 2

    other = session_factory()
    try:
        assert students.exists(other, sid) is True
        count = other.execute(
            select(func.count()).select_from(Enrollment).where(Enrollment.student_id == sid)
        ).scalar()
        assert count == 2
    finally:
        other.close()
