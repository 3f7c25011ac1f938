import datetime
import uuid

from pydantic import BaseModel


class UserRead(BaseModel):
    id: uuid.UUID
    email: str
    username: str
    display_name: str | None = None
    is_active: bool
    created_at: datetime.datetime

    model_config = {"from_attributes": True}
