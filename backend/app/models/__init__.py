# Importe tous les modèles pour enregistrer leurs tables dans Base.metadata
# avant que SQLAlchemy tente de résoudre les clés étrangères inter-modèles.

from app.models.school_class import SchoolClass  # noqa: F401  (doit précéder student et assignment)
from app.models.student import EmailContact, Student  # noqa: F401
from app.models.assignment import Assignment  # noqa: F401
from app.models.grade import Grade  # noqa: F401
from app.models.setting import Setting  # noqa: F401
