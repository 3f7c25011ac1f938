"""
Pydantic contracts for document generation.

``GenerationRequest`` is what the UI submits.  The AI text agent answers with
a ``DocumentDraft`` (pages + theme), which the assembly step turns into the
``DocumentResult`` handed back to the UI and the export layer.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import pydantic
from pydantic import BaseModel, Field

from app.core.errors import FieldError, InvalidGenerationRequest


class DocumentType(str, Enum):
    essay = "essay"
    report = "report"
    letter = "letter"
    meeting_agenda = "meeting-agenda"
    project_proposal = "project-proposal"
    presentation = "presentation"
    timetable = "timetable"


class OutputFormat(str, Enum):
    DOCX = "DOCX"
    PDF = "PDF"
    TXT = "TXT"


class PageSize(str, Enum):
    A4 = "A4"
    A3 = "A3"
    A5 = "A5"


class QualityLevel(str, Enum):
    medium = "medium"
    high = "high"
    ultra = "ultra"


class DocumentThemeName(str, Enum):
    professional = "professional"
    creative = "creative"
    minimalist = "minimalist"


class FontFamily(str, Enum):
    roboto = "Roboto"
    open_sans = "Open Sans"
    lato = "Lato"
    montserrat = "Montserrat"
    merriweather = "Merriweather"
    playfair_display = "Playfair Display"
    nunito = "Nunito"
    raleway = "Raleway"
    source_code_pro = "Source Code Pro"
    lora = "Lora"
    pt_sans = "PT Sans"
    poppins = "Poppins"
    caveat = "Caveat"
    dancing_script = "Dancing Script"
    patrick_hand = "Patrick Hand"
    indie_flower = "Indie Flower"


# ── Request ──────────────────────────────────────────────────


class GenerationRequest(BaseModel):
    prompt: str = Field(min_length=1)
    document_type: DocumentType = DocumentType.essay
    format: OutputFormat = OutputFormat.PDF
    page_size: PageSize = PageSize.A4
    page_count: int = Field(default=1, ge=1, le=30)
    quality_level: QualityLevel = QualityLevel.high
    num_images: int = Field(default=0, ge=0, le=15)
    theme: DocumentThemeName = DocumentThemeName.professional
    font: FontFamily = FontFamily.roboto
    generate_template: bool = True

    @property
    def is_presentation(self) -> bool:
        return self.document_type == DocumentType.presentation

    @property
    def is_timetable(self) -> bool:
        return self.document_type == DocumentType.timetable

    @property
    def is_rich_format(self) -> bool:
        return self.format != OutputFormat.TXT

    @property
    def image_budget(self) -> int:
        """Number of content images the document should carry.

        Timetables ignore images and plain text cannot hold them.
        """
        if self.is_timetable or not self.is_rich_format:
            return 0
        return self.num_images

    @property
    def wants_template(self) -> bool:
        return self.is_presentation and self.generate_template


@dataclass
class RequestValidation:
    """Result of ``validate_generation_request``: a request or its field errors."""

    request: GenerationRequest | None = None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.request is not None and not self.errors

    def unwrap(self) -> GenerationRequest:
        if not self.ok:
            raise InvalidGenerationRequest(self.errors)
        return self.request


def validate_generation_request(data: Mapping[str, Any]) -> RequestValidation:
    """Check raw request values against the schema without raising."""
    try:
        request = GenerationRequest.model_validate(dict(data))
    except pydantic.ValidationError as exc:
        errors = [
            FieldError(
                field=".".join(str(part) for part in err["loc"]) or "request",
                message=err["msg"],
            )
            for err in exc.errors()
        ]
        return RequestValidation(errors=errors)
    return RequestValidation(request=request)


# ── AI output (text step) ────────────────────────────────────


class PageDraft(BaseModel):
    title: str | None = Field(
        default=None,
        description="For presentations, the title of the slide. For other documents, this can be empty.",
    )
    content: str = Field(
        description=(
            "The text content for this page, in markdown. If a content image is requested, "
            "include an image tag like `![Alt text](placeholder)` where it should appear."
        ),
    )
    image_prompt: str | None = Field(
        default=None,
        description=(
            "If this page was given part of the image budget, a concise prompt for an image "
            "generation model, e.g. 'A clean infographic diagram of the 4-step process.'. "
            "Otherwise leave empty."
        ),
    )


class ThemeDraft(BaseModel):
    background_color: str = Field(description="CSS background color for the page content area, e.g. '#ffffff'.")
    text_color: str = Field(description="CSS color for the main text, e.g. '#333333'.")
    heading_color: str = Field(description="CSS color for headings.")
    background_prompt: str = Field(
        description=(
            "Prompt for an image model to create a decorative border or frame that stays on "
            "the page edges and does not interfere with the text."
        ),
    )


class DocumentDraft(BaseModel):
    pages: list[PageDraft] = []
    theme: ThemeDraft | None = None

    @property
    def image_prompts(self) -> list[str]:
        return [page.image_prompt or "" for page in self.pages]


# ── Final result (assembly step) ─────────────────────────────


class RenderedPage(BaseModel):
    content: str
    markdown_content: str
    image_data_uri: str | None = None


class DocumentTheme(BaseModel):
    background_color: str
    text_color: str
    heading_color: str
    background_image_data_uri: str | None = None


class DocumentResult(BaseModel):
    pages: list[RenderedPage]
    theme: DocumentTheme
    is_presentation: bool = False


# ── Export ───────────────────────────────────────────────────


class ExportRequest(BaseModel):
    result: DocumentResult
    format: OutputFormat = OutputFormat.DOCX
    font: FontFamily = FontFamily.roboto
    page_size: PageSize = PageSize.A4
    document_type: DocumentType = DocumentType.essay
