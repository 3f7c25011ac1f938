"""Recent generations router: revisit past results without regenerating."""

import uuid

from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from app.api.deps import get_current_user, get_db, get_pipeline
from app.controllers import generation_controller, recent_controller
from app.core.document_pipeline import DocumentPipeline
from app.models.user import User
from app.schemas.generation import DocumentResult
from app.schemas.recent import RecentGenerationRead, RecentGenerationSummary

router = APIRouter(prefix="/recent", tags=["recent"])


@router.get("/", response_model=list[RecentGenerationSummary])
async def list_recent_generations(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List the current user's recent generations, newest first."""
    return await recent_controller.list_recent_generations(user, db)


@router.get("/{item_id}", response_model=RecentGenerationRead)
async def get_recent_generation(
    item_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get one recent generation with its full result."""
    return await recent_controller.get_recent_generation(user, item_id, db)


@router.post("/{item_id}/regenerate", response_model=DocumentResult)
async def regenerate(
    item_id: uuid.UUID,
    user: User = Depends(get_current_user),
    pipeline: DocumentPipeline = Depends(get_pipeline),
    db: AsyncSession = Depends(get_db),
):
    """Run the pipeline again with the request values of a recent generation."""
    return await generation_controller.regenerate_document(user, item_id, pipeline, db)
