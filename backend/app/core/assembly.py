"""
Assembly of generated text and images into the final document.

Pure transforms only: markdown to HTML, image placeholder substitution, and
composition of ``RenderedPage`` / ``DocumentResult`` objects.
"""

from __future__ import annotations

import html as html_mod
import re
from collections.abc import Sequence

import markdown

from app.schemas.generation import (
    DocumentDraft,
    DocumentResult,
    DocumentTheme,
    PageDraft,
    RenderedPage,
)

_MARKDOWN_EXTENSIONS = ["extra", "sane_lists"]

# A paragraph wrapping a single <img src="placeholder">, as produced by ![alt](placeholder)
_PLACEHOLDER_RE = re.compile(
    r"<p>\s*<img\b[^>]*\bsrc=\"placeholder\"[^>]*/?>\s*</p>",
    re.IGNORECASE,
)

# Any leftover placeholder image, including one inline with text
_PLACEHOLDER_IMG_RE = re.compile(r"<img\b[^>]*\bsrc=\"placeholder\"[^>]*/?>", re.IGNORECASE)

_IMAGE_STYLE = (
    "max-height: 300px; margin: 1rem auto; border-radius: 0.5rem; "
    "background-color: white; padding: 0.5rem;"
)


def render_markdown(text: str) -> str:
    """Convert markdown to HTML.  Same input always yields the same output."""
    return markdown.markdown(text, extensions=_MARKDOWN_EXTENSIONS)


def image_markup(data_uri: str) -> str:
    return (
        f'<img src="{html_mod.escape(data_uri, quote=True)}" alt="Generated content image" '
        f'style="{_IMAGE_STYLE}" data-ai-hint="infographic diagram" />'
    )


def inject_image(content_html: str, data_uri: str) -> str:
    """Put the image at the first placeholder paragraph, or append it."""
    markup = image_markup(data_uri)
    replaced, count = _PLACEHOLDER_RE.subn(lambda _: markup, content_html, count=1)
    if count:
        return replaced
    return content_html + markup


def strip_placeholders(content_html: str) -> str:
    """Drop placeholder images that never received a generated image."""
    content_html = _PLACEHOLDER_RE.sub("", content_html)
    return _PLACEHOLDER_IMG_RE.sub("", content_html).strip()


def assemble_page(page: PageDraft, image_data_uri: str | None = None) -> RenderedPage:
    title_html = f"<h1>{html_mod.escape(page.title)}</h1>" if page.title else ""
    title_markdown = f"# {page.title}\n\n" if page.title else ""

    content_html = render_markdown(page.content)
    if image_data_uri:
        content_html = inject_image(content_html, image_data_uri)
    content_html = strip_placeholders(content_html)

    return RenderedPage(
        content=title_html + content_html,
        markdown_content=title_markdown + page.content,
        image_data_uri=image_data_uri,
    )


def assemble_document(
    draft: DocumentDraft,
    background_image: str | None,
    page_images: Sequence[str | None],
    is_presentation: bool,
) -> DocumentResult:
    """Merge the draft with its images.

    ``page_images`` is aligned 1:1 with ``draft.pages``; missing trailing
    entries mean "no image".
    """
    pages = [
        assemble_page(page, page_images[index] if index < len(page_images) else None)
        for index, page in enumerate(draft.pages)
    ]
    theme = draft.theme
    return DocumentResult(
        pages=pages,
        theme=DocumentTheme(
            background_color=theme.background_color,
            text_color=theme.text_color,
            heading_color=theme.heading_color,
            background_image_data_uri=background_image,
        ),
        is_presentation=is_presentation,
    )
