"""
Server-side export of a ``DocumentResult``.

- **TXT** – visible text of every page, pages separated by a ``---`` rule.
- **DOCX** – a self-contained HTML document served with a ``.doc`` extension,
  which word processors open as a formatted document.  Theme colours, the
  chosen Google font and the generated border image are inlined.

PDF export is rasterised in the browser and is not produced here.

``render_handwritten_note`` builds the lined-paper HTML page for the
handwriting converter.
"""

from __future__ import annotations

import html as html_mod
from dataclasses import dataclass

from bs4 import BeautifulSoup

from app.schemas.generation import DocumentResult, ExportRequest, FontFamily, OutputFormat, PageSize

TXT_PAGE_SEPARATOR = "\n\n---\n\n"


@dataclass(frozen=True)
class ExportedFile:
    content: str
    media_type: str
    filename: str


def _e(text: str | None) -> str:
    """HTML-escape helper."""
    return html_mod.escape(text or "")


def page_text(page_html: str) -> str:
    return BeautifulSoup(page_html, "html.parser").get_text()


def export_txt(result: DocumentResult) -> str:
    return TXT_PAGE_SEPARATOR.join(page_text(page.content) for page in result.pages)


def _google_font_link(font_name: str) -> str:
    family = font_name.replace(" ", "+")
    return f"https://fonts.googleapis.com/css2?family={family}:wght@400;700&display=swap"


def _render_page(result: DocumentResult, page_html: str) -> str:
    theme = result.theme
    border = (
        f"border-image-source: url({_e(theme.background_image_data_uri)}); "
        "border-image-slice: 20; border-image-width: 20px; border-image-repeat: repeat;"
        if theme.background_image_data_uri
        else "border-image-source: none;"
    )
    style = (
        "width: 100%; max-width: 8.5in; margin: 2rem auto; padding: 2rem 2.5rem; "
        "box-shadow: 0 0 10px rgba(0,0,0,0.1); "
        f"background-color: {_e(theme.background_color)}; color: {_e(theme.text_color)}; "
        f"{border} border-style: solid; border-color: transparent; page-break-after: always;"
    )
    return f'<div class="page" style="{style}">{page_html}</div>'


def export_doc(
    result: DocumentResult,
    font: FontFamily = FontFamily.roboto,
    page_size: PageSize = PageSize.A4,
) -> str:
    heading = _e(result.theme.heading_color)
    pages = "\n".join(_render_page(result, page.content) for page in result.pages)
    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <link href="{_google_font_link(font.value)}" rel="stylesheet">
  <style>
    body {{
      font-family: '{font.value}', sans-serif;
      font-size: 12pt;
      background-color: #f0f0f0;
      margin: 0;
      padding: 1rem;
    }}
    h1, h2, h3, h4, h5, h6 {{ font-weight: bold; }}
    h1 {{ font-size: 22pt; color: {heading}; }}
    h2 {{ font-size: 18pt; color: {heading}; }}
    h3 {{ font-size: 14pt; color: {heading}; }}
    p {{ margin: 0 0 1em 0; }}
    table {{ border-collapse: collapse; width: 100%; }}
    td, th {{ border: 1px solid #ccc; padding: 8px; }}
    img {{ max-width: 100%; height: auto; border-radius: 8px; }}
    @page {{ size: {page_size.value}; }}
  </style>
</head>
<body>
{pages}
</body>
</html>"""


def export_document(payload: ExportRequest) -> ExportedFile:
    """Render *payload* in its requested format.

    Raises ``ValueError`` for PDF, which only the browser can produce.
    """
    basename = payload.document_type.value
    if payload.format == OutputFormat.TXT:
        return ExportedFile(
            content=export_txt(payload.result),
            media_type="text/plain; charset=utf-8",
            filename=f"{basename}.txt",
        )
    if payload.format == OutputFormat.DOCX:
        return ExportedFile(
            content=export_doc(payload.result, payload.font, payload.page_size),
            media_type="application/msword",
            filename=f"{basename}.doc",
        )
    raise ValueError(f"{payload.format.value} export is rendered client-side")


def render_handwritten_note(text: str, font_name: str) -> str:
    """Lined-paper HTML page showing *text* in a handwriting font."""
    paragraphs = [p.strip() for p in text.split("\n\n") if p.strip()]
    body = "\n".join("<p>" + "<br>".join(_e(line) for line in p.splitlines()) + "</p>" for p in paragraphs)
    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <link href="{_google_font_link(font_name)}" rel="stylesheet">
  <style>
    body {{
      font-family: '{font_name}', cursive;
      font-size: 20pt;
      line-height: 32px;
      color: #1a2a6c;
      background-color: #fdfdf8;
      background-image: linear-gradient(#d8e3f0 1px, transparent 1px);
      background-size: 100% 32px;
      margin: 0;
      padding: 48px 48px 48px 96px;
    }}
    p {{ margin: 0 0 32px 0; }}
  </style>
</head>
<body>
{body}
</body>
</html>"""
