"""Document router: generation and export."""

from fastapi import APIRouter, Depends, Response
from sqlmodel.ext.asyncio.session import AsyncSession

from app.api.deps import get_current_user, get_db, get_pipeline
from app.controllers import generation_controller
from app.core.document_pipeline import DocumentPipeline
from app.models.user import User
from app.schemas.generation import DocumentResult, ExportRequest, GenerationRequest

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post("/generate", response_model=DocumentResult)
async def generate_document(
    payload: GenerationRequest,
    user: User = Depends(get_current_user),
    pipeline: DocumentPipeline = Depends(get_pipeline),
    db: AsyncSession = Depends(get_db),
):
    """Generate a document (text, images and theme) from the request."""
    return await generation_controller.generate_document(user, payload, pipeline, db)


@router.post("/export")
async def export_document(
    payload: ExportRequest,
    user: User = Depends(get_current_user),
):
    """Download a generated document as TXT or DOCX."""
    exported = generation_controller.export(payload)
    return Response(
        content=exported.content,
        media_type=exported.media_type,
        headers={"Content-Disposition": f'attachment; filename="{exported.filename}"'},
    )
