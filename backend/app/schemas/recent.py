import datetime
from uuid import UUID

from pydantic import BaseModel

from app.schemas.generation import DocumentResult


class RecentGenerationSummary(BaseModel):
    id: UUID
    type: str
    title: str
    created_at: datetime.datetime

    model_config = {"from_attributes": True}


class RecentGenerationRead(RecentGenerationSummary):
    data: DocumentResult
    # Raw request values; re-validated before any regeneration
    form_values: dict
