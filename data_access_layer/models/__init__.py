# Importe tous les modèles pour enregistrer leurs tables dans Base.metadata
# avant que SQLAlchemy tente de résoudre les clés étrangères inter-modèles.
# Enrollment référence Courses.CourseID et Students.ID : ses parents doivent être chargés.

from data_access_layer.models.student import Student  # noqa: F401
from data_access_layer.models.course import Course  # noqa: F401
from data_access_layer.models.enrollment import Enrollment  # noqa: F401
