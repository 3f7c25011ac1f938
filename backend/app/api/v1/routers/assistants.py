"""Assistant router: single-call AI helpers around documents."""

from fastapi import APIRouter, Depends

from app.api.deps import get_current_user
from app.core import ai_generators
from app.models.user import User
from app.schemas.assistants import (
    AnalyzeDocumentRequest,
    AnalyzeDocumentResponse,
    ChatRequest,
    ChatResponse,
    EditDocumentRequest,
    EditDocumentResponse,
    HandwritingRequest,
    HandwritingResponse,
    IllustrationRequest,
    IllustrationResponse,
    ResumeRequest,
    ResumeResponse,
    ShortNotesRequest,
    ShortNotesResponse,
    SolveBookletRequest,
    SolveBookletResponse,
)

router = APIRouter(prefix="/assistants", tags=["assistants"])


@router.post("/edit", response_model=EditDocumentResponse)
async def edit_document(payload: EditDocumentRequest, user: User = Depends(get_current_user)):
    """Professionally revise a document."""
    return await ai_generators.edit_document(payload)


@router.post("/analyze", response_model=AnalyzeDocumentResponse)
async def analyze_document(payload: AnalyzeDocumentRequest, user: User = Depends(get_current_user)):
    """Summarise a document and answer a question about it."""
    return await ai_generators.analyze_document(payload)


@router.post("/short-notes", response_model=ShortNotesResponse)
async def short_notes(payload: ShortNotesRequest, user: User = Depends(get_current_user)):
    """Turn chapter content into revision notes."""
    return await ai_generators.generate_short_notes(payload)


@router.post("/solve", response_model=SolveBookletResponse)
async def solve_booklet(payload: SolveBookletRequest, user: User = Depends(get_current_user)):
    """Answer every question in a booklet."""
    return await ai_generators.solve_booklet(payload)


@router.post("/resume", response_model=ResumeResponse)
async def resume(payload: ResumeRequest, user: User = Depends(get_current_user)):
    """Draft a resume from skills and experience."""
    return await ai_generators.generate_resume(payload)


@router.post("/illustration", response_model=IllustrationResponse)
async def illustration(payload: IllustrationRequest, user: User = Depends(get_current_user)):
    """Generate a stand-alone infographic illustration."""
    return await ai_generators.generate_illustration(payload)


@router.post("/handwriting", response_model=HandwritingResponse)
async def handwriting(payload: HandwritingRequest, user: User = Depends(get_current_user)):
    """Convert text into a handwritten-style note page."""
    return await ai_generators.convert_to_handwriting(payload)


@router.post("/chat", response_model=ChatResponse)
async def chat(payload: ChatRequest):
    """Ask the in-app help assistant a question."""
    return await ai_generators.chat_with_assistant(payload)
