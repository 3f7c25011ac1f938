"""Per-user list of recent generations, capped at ``MAX_RECENT_GENERATIONS``."""

import logging
import uuid

from fastapi import HTTPException
from sqlalchemy import delete, select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import settings
from app.models.recent_generation import RecentGeneration
from app.models.user import User
from app.schemas.generation import DocumentResult, GenerationRequest

logger = logging.getLogger(__name__)

TITLE_LENGTH = 50


def make_title(prompt: str) -> str:
    return prompt[:TITLE_LENGTH] + "..."


async def record_recent_generation(
    user: User,
    request: GenerationRequest,
    result: DocumentResult,
    db: AsyncSession,
    generation_type: str = "document",
) -> RecentGeneration:
    """Store a successful generation and evict the user's oldest beyond the cap."""
    item = RecentGeneration(
        user_id=user.id,
        type=generation_type,
        title=make_title(request.prompt),
        data=result.model_dump(mode="json"),
        form_values=request.model_dump(mode="json"),
    )
    db.add(item)
    await db.flush()

    keep = (
        select(RecentGeneration.id)
        .where(RecentGeneration.user_id == user.id)
        .order_by(RecentGeneration.created_at.desc())
        .limit(settings.MAX_RECENT_GENERATIONS)
    )
    kept_ids = list((await db.execute(keep)).scalars().all())
    evicted = await db.execute(
        delete(RecentGeneration).where(
            RecentGeneration.user_id == user.id,
            RecentGeneration.id.not_in(kept_ids),
        )
    )
    if evicted.rowcount:
        logger.info("Evicted %d old recent generations for user %s", evicted.rowcount, user.id)

    await db.refresh(item)
    return item


async def list_recent_generations(user: User, db: AsyncSession) -> list[RecentGeneration]:
    result = await db.execute(
        select(RecentGeneration)
        .where(RecentGeneration.user_id == user.id)
        .order_by(RecentGeneration.created_at.desc())
        .limit(settings.MAX_RECENT_GENERATIONS)
    )
    return list(result.scalars().all())


async def get_recent_generation(user: User, item_id: uuid.UUID, db: AsyncSession) -> RecentGeneration:
    item = await db.get(RecentGeneration, item_id)
    if not item or item.user_id != user.id:
        raise HTTPException(status_code=404, detail="Recent generation not found")
    return item
