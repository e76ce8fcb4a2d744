"""
Schémas Pydantic pour les inscriptions (Enrollments).
Les noms JSON (EnrollmentID, CourseID, ...) sont exposés via des alias PascalCase.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class EnrollmentCreate(BaseModel):
    """Schéma de création d'une inscription (POST /api/Enrollment)."""
    course_id: int = Field(alias="CourseID")
    student_id: int = Field(alias="StudentID")
    grade: Optional[int] = Field(default=None, alias="Grade")

    model_config = {"populate_by_name": True}


class EnrollmentUpdate(EnrollmentCreate):
    """Remplacement complet d'une inscription (PUT /api/Enrollment/{id})."""
    id: int = Field(alias="EnrollmentID")
    version: Optional[int] = Field(default=None, alias="Version")


class CourseRef(BaseModel):
    """Cours référencé par une inscription."""
    id: int = Field(alias="CourseID")
    title: str = Field(alias="Title")
    credits: int = Field(alias="Credits")

    model_config = {"from_attributes": True, "populate_by_name": True}


class StudentRef(BaseModel):
    """Élève référencé par une inscription."""
    id: int = Field(alias="ID")
    last_name: str = Field(alias="LastName")
    first_mid_name: str = Field(alias="FirstMidName")
    enrollment_date: datetime = Field(alias="EnrollmentDate")

    model_config = {"from_attributes": True, "populate_by_name": True}


class EnrollmentResponse(BaseModel):
    """
    Inscription renvoyée au client.
    Course et Student sont null quand ils correspondent à l'enregistrement parent englobant.
    """
    id: int = Field(alias="EnrollmentID")
    course_id: int = Field(alias="CourseID")
    student_id: int = Field(alias="StudentID")
    grade: Optional[int] = Field(alias="Grade")
    version: int = Field(alias="Version")
    course: Optional[CourseRef] = Field(default=None, alias="Course")
    student: Optional[StudentRef] = Field(default=None, alias="Student")

    model_config = {"from_attributes": True, "populate_by_name": True}
