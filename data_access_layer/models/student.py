"""
Modèle SQLAlchemy pour la table Students.
Les inscriptions sont reliées par clé étrangère explicite, sans relationship() :
les jointures sont faites par la couche repositories.
"""

from sqlalchemy import Column, DateTime, Integer, String

from data_access_layer.database import Base


class Student(Base):
    __tablename__ = "Students"

    id = Column("ID", Integer, primary_key=True, autoincrement=True)
    last_name = Column("LastName", String, nullable=False)
    first_mid_name = Column("FirstMidName", String, nullable=False)
    enrollment_date = Column("EnrollmentDate", DateTime(timezone=False), nullable=False)
    version = Column("Version", Integer, nullable=False, default=1)  # Verrou optimiste
