from typing import TYPE_CHECKING

from sqlmodel import Field, Relationship

from app.models.base import BaseUUIDModel

if TYPE_CHECKING:
    from app.models.recent_generation import RecentGeneration


class User(BaseUUIDModel, table=True):
    __tablename__ = "users"

    email: str = Field(max_length=320, unique=True, index=True)
    username: str = Field(max_length=50, unique=True, index=True)
    display_name: str | None = Field(default=None, max_length=100)
    is_active: bool = Field(default=True)

    # Relationships
    recent_generations: list["RecentGeneration"] = Relationship(
        back_populates="user",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )
