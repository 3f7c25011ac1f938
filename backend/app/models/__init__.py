# Import all models so SQLModel.metadata registers them for Alembic autogenerate.
from app.models.base import BaseUUIDModel  # noqa: F401
from app.models.user import User  # noqa: F401
from app.models.recent_generation import RecentGeneration  # noqa: F401
