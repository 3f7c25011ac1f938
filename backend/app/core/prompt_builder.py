"""
Instruction builder for the document text agent.

One prompt variant per document class:

- ``PresentationPrompt`` – title slide + N content slides + closing slide
- ``TimetablePrompt``    – a single page holding one markdown table
- ``StandardPrompt``     – essays, reports, letters, agendas, proposals

Every variant renders a complete instruction string from the shared
``GenerationRequest`` and knows how many pages the model must return.

``build_illustration_prompt`` writes the single image prompt for a stand-alone
infographic illustration.
"""

from __future__ import annotations

from dataclasses import dataclass

from app.schemas.assistants import ColorPalette, IllustrationRequest
from app.schemas.generation import DocumentThemeName, GenerationRequest, QualityLevel


_QUALITY_GUIDANCE = {
    QualityLevel.medium: "Generate a detailed and polished document.",
    QualityLevel.high: "Generate a well-structured, comprehensive document.",
    QualityLevel.ultra: "Generate an exceptionally detailed, professional, and in-depth document.",
}

_THEME_GUIDANCE = {
    DocumentThemeName.professional: (
        "Use clean, classic styles. A white background ('#ffffff') with dark text. "
        "The background prompt should be for something subtle and professional, "
        "like 'a simple thin-line border in dark grey'."
    ),
    DocumentThemeName.creative: (
        "Use vibrant colors and interesting designs. The background color can be slightly "
        "off-white. The background prompt should be imaginative and artistic, like "
        "'abstract watercolor flower borders'."
    ),
    DocumentThemeName.minimalist: (
        "Use simple, elegant styles. An off-white background like '#f8f8f8' with dark grey "
        "text. The background prompt should be for a very simple frame, like "
        "'a single, delicate painted line as a border'."
    ),
}


def _common_trailer(request: GenerationRequest) -> str:
    budget = request.image_budget
    quality = request.quality_level
    return f"""\
The quality level for this generation is '{quality.value}'. This applies to both the \
written content and the image prompts. The content must be in markdown format.
{_QUALITY_GUIDANCE[quality]}

You have a budget to generate exactly {budget} images.
Distribute these images across the pages where they would be most effective by writing an \
'image_prompt' for that page.
Each 'image_prompt' should describe a clean, vector-style illustration, diagram, or \
infographic on a white background. It must NOT be a photograph. For example: \
"A clean infographic diagram of the 4-step process.", "A vector illustration of a bar chart showing growth."
If a page does not get an image, leave its 'image_prompt' empty. Do not write more or fewer \
than {budget} image prompts in total.

User Prompt: {request.prompt}
"""


@dataclass
class DocumentPrompt:
    request: GenerationRequest

    @property
    def expected_page_count(self) -> int:
        return self.request.page_count

    def body(self) -> str:
        raise NotImplementedError

    def render(self) -> str:
        header = (
            f"Generate a '{self.request.document_type.value}' and a visual theme based on the "
            f"user's request.\n"
            f"The document must have exactly {self.expected_page_count} pages (or slides).\n\n"
        )
        return header + self.body() + "\n" + _common_trailer(self.request)


@dataclass
class PresentationPrompt(DocumentPrompt):
    @property
    def expected_page_count(self) -> int:
        return self.request.page_count + 2

    def body(self) -> str:
        n = self.request.page_count
        return f"""\
The structure must be: a Title Slide (content is a short, catchy title; the title field is \
empty), {n} Content Slides (each with a title and content), and a Closing Slide \
("Thank You" or "Q&A"). The total number of slides is {n} + 2.
For presentation themes, ALWAYS use a dark background color (e.g. '#111827', '#000000'), \
a light text color, and a vibrant heading color.
The 'background_prompt' must describe a visually consistent, abstract, and professional \
design suitable for a slide template border.
"""


@dataclass
class TimetablePrompt(DocumentPrompt):
    @property
    def expected_page_count(self) -> int:
        return 1

    def body(self) -> str:
        return """\
You are an expert scheduler. The output MUST be a single page containing a markdown table \
with the schedule. The table should be well-structured and easy to read.
Use the user's prompt to determine the days, times, subjects, or activities. The 'content' \
field must contain ONLY the markdown table.
For the theme, use a 'professional' style with a white background and dark text.
"""


@dataclass
class StandardPrompt(DocumentPrompt):
    def body(self) -> str:
        theme = self.request.theme
        return f"""\
For the '{theme.value}' theme, define a visual style in the 'theme' output field.
{_THEME_GUIDANCE[theme]}
The 'background_prompt' should be for a decorative page border or frame that does not \
interfere with the text. The 'background_color' is for the content area behind the text.
"""


def build_document_prompt(request: GenerationRequest) -> DocumentPrompt:
    """Pick the prompt variant matching the request's document type."""
    if request.is_presentation:
        return PresentationPrompt(request)
    if request.is_timetable:
        return TimetablePrompt(request)
    return StandardPrompt(request)


_PALETTE_GUIDANCE = {
    ColorPalette.vibrant: "bright, saturated colors with strong contrast",
    ColorPalette.professional: "a restrained corporate palette of navy, grey and one accent color",
    ColorPalette.pastel: "soft pastel tones",
    ColorPalette.monochromatic: "shades of a single color",
}


def build_illustration_prompt(request: IllustrationRequest) -> str:
    return (
        f"A clean vector infographic illustration titled '{request.title}'. "
        f"{request.description.strip()} "
        f"Show exactly {request.num_items} distinct, clearly labelled items or steps. "
        f"Use {_PALETTE_GUIDANCE[request.color_palette]}. "
        "Flat design on a white background with crisp, legible labels. "
        "Not a photograph, no photorealistic elements."
    )
