"""
Modèle SQLAlchemy pour la table Courses.
Le CourseID est fourni par le client : pas d'auto-incrément.
"""

from sqlalchemy import Column, Integer, String

from data_access_layer.database import Base


class Course(Base):
    __tablename__ = "Courses"

    id = Column("CourseID", Integer, primary_key=True, autoincrement=False)
    title = Column("Title", String, nullable=False)
    credits = Column("Credits", Integer, nullable=False)
    version = Column("Version", Integer, nullable=False, default=1)
