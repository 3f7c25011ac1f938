"""
Document generation pipeline.

1. **Text**   – one structured call returns every page and the theme.
2. **Images** – one concurrent call per requested image (plus the slide
   template background for presentations); failures degrade to "no image".
3. **Assembly** – markdown rendering and image placement per page.

Text failures abort the whole run; image failures never do.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from app.core.ai_generators import run_document_text_agent
from app.core.assembly import assemble_document
from app.core.config import settings
from app.core.errors import GenerationFailure
from app.core.image_generation import ImageGenerator, generate_images, generate_openai_image
from app.core.prompt_builder import DocumentPrompt, build_document_prompt
from app.schemas.generation import DocumentDraft, DocumentResult, GenerationRequest

logger = logging.getLogger(__name__)

TextGenerator = Callable[[DocumentPrompt], Awaitable[DocumentDraft | None]]

# Timetables always render on the professional light palette
TIMETABLE_PALETTE = {
    "background_color": "#ffffff",
    "text_color": "#222222",
    "heading_color": "#111111",
}


async def generate_text(request: GenerationRequest, generator: TextGenerator) -> DocumentDraft:
    """Run the text step and reject drafts without pages or theme."""
    prompt = build_document_prompt(request)
    try:
        draft = await generator(prompt)
    except GenerationFailure:
        raise
    except Exception as e:
        raise GenerationFailure(f"Failed to generate document content: {e}") from e

    if draft is None or not draft.pages or draft.theme is None:
        raise GenerationFailure("Failed to generate document content or theme from the model.")

    logger.info(
        "Text step produced %d pages for a %s (expected %d)",
        len(draft.pages),
        request.document_type.value,
        prompt.expected_page_count,
    )
    if request.is_timetable:
        draft = force_timetable_palette(draft)
    return enforce_image_budget(draft, request.image_budget)


def force_timetable_palette(draft: DocumentDraft) -> DocumentDraft:
    theme = draft.theme.model_copy(update=TIMETABLE_PALETTE)
    if theme != draft.theme:
        logger.warning("Timetable theme replaced with the light palette (was %s)", draft.theme.background_color)
    return draft.model_copy(update={"theme": theme})


def enforce_image_budget(draft: DocumentDraft, budget: int) -> DocumentDraft:
    """Clear image prompts beyond *budget*, keeping the earliest pages' prompts."""
    remaining = budget
    pages = []
    for page in draft.pages:
        if page.image_prompt and page.image_prompt.strip():
            if remaining > 0:
                remaining -= 1
            else:
                page = page.model_copy(update={"image_prompt": None})
        elif page.image_prompt:
            page = page.model_copy(update={"image_prompt": None})
        pages.append(page)

    requested = sum(1 for p in draft.image_prompts if p.strip())
    if requested > budget:
        logger.warning("Model wrote %d image prompts for a budget of %d; extras dropped", requested, budget)
    elif requested < budget:
        logger.warning("Model wrote %d image prompts for a budget of %d", requested, budget)

    return draft.model_copy(update={"pages": pages})


class DocumentPipeline:
    """Text → images → assembly, with injectable provider collaborators."""

    def __init__(
        self,
        text_generator: TextGenerator | None = None,
        image_generator: ImageGenerator | None = None,
        image_timeout: float | None = None,
    ):
        self.text_generator = text_generator or run_document_text_agent
        self.image_generator = image_generator or generate_openai_image
        self.image_timeout = image_timeout

    async def generate(self, request: GenerationRequest) -> DocumentResult:
        draft = await generate_text(request, self.text_generator)

        background_prompt = draft.theme.background_prompt if request.wants_template else ""
        prompts = [background_prompt] + draft.image_prompts
        batch = await generate_images(prompts, self.image_generator, timeout=self.image_timeout)

        images = batch.images
        return assemble_document(
            draft,
            background_image=images[0],
            page_images=images[1:],
            is_presentation=request.is_presentation,
        )


_default_pipeline: DocumentPipeline | None = None


def get_default_pipeline() -> DocumentPipeline:
    global _default_pipeline
    if _default_pipeline is None:
        _default_pipeline = DocumentPipeline(image_timeout=settings.IMAGE_TIMEOUT_SECONDS or None)
    return _default_pipeline
