"""
Modèle SQLAlchemy pour la table Enrollments.
Entité de jointure Student ↔ Course portant la note (Grade).
La suppression d'un parent supprime ses inscriptions (ON DELETE CASCADE) ;
les repositories effectuent aussi cette cascade explicitement dans la même transaction.
"""

from sqlalchemy import Column, ForeignKey, Integer

from data_access_layer.database import Base


class Enrollment(Base):
    __tablename__ = "Enrollments"

    id = Column("EnrollmentID", Integer, primary_key=True, autoincrement=True)
    course_id = Column(
        "CourseID", Integer, ForeignKey("Courses.CourseID", ondelete="CASCADE"), nullable=False, index=True
    )
    student_id = Column(
        "StudentID", Integer, ForeignKey("Students.ID", ondelete="CASCADE"), nullable=False, index=True
    )
    grade = Column("Grade", Integer, nullable=True)
    version = Column("Version", Integer, nullable=False, default=1)
