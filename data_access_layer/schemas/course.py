"""
Schémas Pydantic pour les cours.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from data_access_layer.schemas.enrollment import EnrollmentResponse


class CourseCreate(BaseModel):
    """Création d'un cours : le CourseID est choisi par le client."""
    id: int = Field(alias="CourseID")
    title: str = Field(alias="Title")
    credits: int = Field(alias="Credits", ge=0)

    model_config = {"populate_by_name": True}

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le titre du cours ne peut pas être vide.")
        return v.strip()


class CourseUpdate(CourseCreate):
    version: Optional[int] = Field(default=None, alias="Version")


class CourseResponse(BaseModel):
    id: int = Field(alias="CourseID")
    title: str = Field(alias="Title")
    credits: int = Field(alias="Credits")
    version: int = Field(alias="Version")
    enrollments: List[EnrollmentResponse] = Field(default_factory=list, alias="Enrollments")

    model_config = {"from_attributes": True, "populate_by_name": True}
