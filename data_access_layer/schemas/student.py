"""
Schémas Pydantic pour les élèves.
Les champs JSON gardent les noms exacts de l'API (ID, LastName, FirstMidName, ...).
"""

from datetime import date, datetime, time, timezone
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from data_access_layer.schemas.enrollment import EnrollmentResponse


class StudentCreate(BaseModel):
    """Schéma de création d'un élève (POST /api/Student). Un ID fourni est ignoré."""
    id: Optional[int] = Field(default=None, alias="ID")
    last_name: str = Field(alias="LastName")
    first_mid_name: str = Field(alias="FirstMidName")
    enrollment_date: datetime = Field(alias="EnrollmentDate")

    model_config = {"populate_by_name": True}

    @field_validator("last_name", "first_mid_name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le champ ne peut pas être vide.")
        return v.strip()

    @field_validator("enrollment_date", mode="before")
    @classmethod
    def date_only(cls, v):
        """Accepte une date seule (AAAA-MM-JJ), interprétée à minuit."""
        if isinstance(v, str) and len(v) == 10:
            return datetime.combine(date.fromisoformat(v), time.min)
        if isinstance(v, date) and not isinstance(v, datetime):
            return datetime.combine(v, time.min)
        return v

    @field_validator("enrollment_date")
    @classmethod
    def naive_datetime(cls, v: datetime) -> datetime:
        """EnrollmentDate est stockée sans fuseau horaire (convertie en UTC si besoin)."""
        if v.tzinfo is not None:
            return v.astimezone(timezone.utc).replace(tzinfo=None)
        return v


class StudentUpdate(StudentCreate):
    """
    Remplacement complet d'un élève (PUT /api/Student/{id}).
    ID doit correspondre à l'URL (absent, il ne correspond à aucun élève) ;
    Version, si fournie, doit être celle lue par le client (verrou optimiste).
    """
    id: Optional[int] = Field(default=None, alias="ID")
    version: Optional[int] = Field(default=None, alias="Version")


class StudentResponse(BaseModel):
    """Schéma de réponse pour un élève, avec ses inscriptions."""
    id: int = Field(alias="ID")
    last_name: str = Field(alias="LastName")
    first_mid_name: str = Field(alias="FirstMidName")
    enrollment_date: datetime = Field(alias="EnrollmentDate")
    version: int = Field(alias="Version")
    enrollments: List[EnrollmentResponse] = Field(default_factory=list, alias="Enrollments")

    model_config = {"from_attributes": True, "populate_by_name": True}
