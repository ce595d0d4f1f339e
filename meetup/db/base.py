"""Database base class and model imports."""
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Import all models here for Alembic to detect them
from meetup.db.models.user import User  # noqa: F401, E402
from meetup.db.models.meeting import Meeting  # noqa: F401, E402
from meetup.db.models.participation import Participation  # noqa: F401, E402
from meetup.db.models.notification import Notification  # noqa: F401, E402
