import logging
import uuid

from fastapi import HTTPException
from sqlmodel.ext.asyncio.session import AsyncSession

from app.controllers import recent_controller
from app.core.document_pipeline import DocumentPipeline
from app.core.export import ExportedFile, export_document
from app.models.user import User
from app.schemas.generation import DocumentResult, ExportRequest, GenerationRequest, validate_generation_request

logger = logging.getLogger(__name__)


async def generate_document(
    user: User,
    request: GenerationRequest,
    pipeline: DocumentPipeline,
    db: AsyncSession,
) -> DocumentResult:
    """Run the pipeline and remember the result in the user's recent list."""
    result = await pipeline.generate(request)
    await recent_controller.record_recent_generation(user, request, result, db)
    logger.info(
        "Generated %s with %d pages for user %s",
        request.document_type.value,
        len(result.pages),
        user.id,
    )
    return result


async def regenerate_document(
    user: User,
    item_id: uuid.UUID,
    pipeline: DocumentPipeline,
    db: AsyncSession,
) -> DocumentResult:
    """Generate again from the request values stored with a recent generation."""
    item = await recent_controller.get_recent_generation(user, item_id, db)
    request = validate_generation_request(item.form_values).unwrap()
    return await generate_document(user, request, pipeline, db)


def export(payload: ExportRequest) -> ExportedFile:
    try:
        return export_document(payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
