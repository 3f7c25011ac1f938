from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import JSON, Column
from sqlmodel import Field, Relationship

from app.models.base import BaseUUIDModel

if TYPE_CHECKING:
    from app.models.user import User


class RecentGeneration(BaseUUIDModel, table=True):
    """A past successful generation kept so the user can reopen it.

    Each user keeps at most ``settings.MAX_RECENT_GENERATIONS`` rows; the
    oldest are evicted on insert.
    """

    __tablename__ = "recent_generations"

    user_id: UUID = Field(foreign_key="users.id", index=True)
    type: str = Field(default="document", max_length=30)
    title: str = Field(max_length=255)

    # DocumentResult and the GenerationRequest that produced it
    data: dict = Field(sa_column=Column(JSON, nullable=False))
    form_values: dict = Field(sa_column=Column(JSON, nullable=False))

    # Relationships
    user: "User" = Relationship(back_populates="recent_generations")
