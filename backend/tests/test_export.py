import pytest

from app.core.export import TXT_PAGE_SEPARATOR, export_doc, export_document, export_txt, render_handwritten_note
from app.schemas.generation import (
    DocumentResult,
    DocumentTheme,
    DocumentType,
    ExportRequest,
    FontFamily,
    OutputFormat,
    PageSize,
    RenderedPage,
)


def _result(background: str | None = None) -> DocumentResult:
    return DocumentResult(
        pages=[
            RenderedPage(content="<h1>Intro</h1><p>First <em>page</em>.</p>", markdown_content="# Intro\n\nFirst *page*."),
            RenderedPage(content="<p>Second page.</p>", markdown_content="Second page."),
        ],
        theme=DocumentTheme(
            background_color="#fdf6e3",
            text_color="#333333",
            heading_color="#b58900",
            background_image_data_uri=background,
        ),
    )


def test_txt_export_strips_markup_and_separates_pages():
    text = export_txt(_result())

    assert text == "IntroFirst page." + TXT_PAGE_SEPARATOR + "Second page."
    assert "<" not in text


def test_doc_export_inlines_font_and_theme():
    doc = export_doc(_result(), FontFamily.open_sans, PageSize.A5)

    assert "family=Open+Sans:wght@400;700" in doc
    assert "font-family: 'Open Sans'" in doc
    assert "background-color: #fdf6e3" in doc
    assert "color: #b58900" in doc
    assert "@page { size: A5; }" in doc
    assert doc.count('class="page"') == 2
    assert "border-image-source: none;" in doc


def test_doc_export_uses_border_image_when_present():
    doc = export_doc(_result(background="data:image/png;base64,AAAA"))

    assert "border-image-source: url(data:image/png;base64,AAAA)" in doc


def test_export_document_picks_media_type_and_filename():
    txt = export_document(ExportRequest(result=_result(), format=OutputFormat.TXT, document_type=DocumentType.report))
    doc = export_document(ExportRequest(result=_result(), format=OutputFormat.DOCX))

    assert (txt.media_type, txt.filename) == ("text/plain; charset=utf-8", "report.txt")
    assert (doc.media_type, doc.filename) == ("application/msword", "essay.doc")


def test_pdf_export_is_rejected():
    with pytest.raises(ValueError, match="PDF"):
        export_document(ExportRequest(result=_result(), format=OutputFormat.PDF))


def test_border_image_cannot_break_out_of_the_style_attribute():
    doc = export_doc(_result(background='x"><script>alert(1)</script>'))

    assert "<script>" not in doc
    assert "url(x&quot;&gt;&lt;script&gt;" in doc


def test_handwritten_note_escapes_text_and_keeps_line_breaks():
    html = render_handwritten_note("Dear <diary>,\nsecond line\n\nNew paragraph", "Indie Flower")

    assert "family=Indie+Flower" in html
    assert "font-family: 'Indie Flower', cursive;" in html
    assert "<p>Dear &lt;diary&gt;,<br>second line</p>" in html
    assert "<p>New paragraph</p>" in html
