"""End-to-end pipeline behaviour with stubbed text and image providers."""
import pytest

from app.core.assembly import image_markup
from app.core.document_pipeline import DocumentPipeline, enforce_image_budget, generate_text
from app.core.errors import GenerationFailure
from app.schemas.generation import DocumentDraft, DocumentThemeName, GenerationRequest, PageDraft

from tests.fakes import (
    DARK_THEME,
    LIGHT_THEMES,
    TIMETABLE_TABLE,
    RecordingImageGenerator,
    ScriptedTextGenerator,
    data_uri_for,
)


def _is_light(color: str) -> bool:
    value = color.lstrip("#")
    r, g, b = (int(value[i:i + 2], 16) for i in (0, 2, 4))
    return (r + g + b) / 3 > 200


def _is_dark(color: str) -> bool:
    value = color.lstrip("#")
    r, g, b = (int(value[i:i + 2], 16) for i in (0, 2, 4))
    return (r + g + b) / 3 < 100


@pytest.mark.parametrize("slides", [1, 3, 10])
async def test_presentation_has_title_and_closing_slides(pipeline, slides):
    request = GenerationRequest(
        prompt="The future of renewable energy",
        document_type="presentation",
        page_count=slides,
    )

    result = await pipeline.generate(request)

    assert result.is_presentation is True
    assert len(result.pages) == slides + 2
    assert result.pages[0].content == "<p>The Future of Energy</p>"
    assert result.pages[0].markdown_content == "The Future of Energy"
    assert result.pages[-1].content.startswith("<h1>Thank You</h1>")
    assert _is_dark(result.theme.background_color)


async def test_presentation_template_background_is_generated_first(pipeline, image_generator):
    request = GenerationRequest(prompt="Quarterly review", document_type="presentation", page_count=2)

    result = await pipeline.generate(request)

    assert image_generator.calls == ["abstract neon geometric slide border"]
    assert result.theme.background_image_data_uri == data_uri_for("abstract neon geometric slide border")


async def test_presentation_without_template_skips_background(pipeline, image_generator):
    request = GenerationRequest(
        prompt="Quarterly review", document_type="presentation", page_count=2, generate_template=False
    )

    result = await pipeline.generate(request)

    assert image_generator.calls == []
    assert result.theme.background_image_data_uri is None


async def test_non_presentations_never_request_a_background(pipeline, image_generator):
    result = await pipeline.generate(GenerationRequest(prompt="An essay", generate_template=True))

    assert image_generator.calls == []
    assert result.theme.background_image_data_uri is None


async def test_timetable_is_one_markdown_table_on_light_theme(pipeline):
    request = GenerationRequest(
        prompt="Weekly timetable, Monday to Friday, 9am to 3pm",
        document_type="timetable",
        page_count=4,
        num_images=3,
    )

    result = await pipeline.generate(request)

    assert len(result.pages) == 1
    page = result.pages[0]
    assert any(line.strip().startswith("|") for line in page.markdown_content.splitlines())
    assert "<table>" in page.content
    assert page.image_data_uri is None
    assert _is_light(result.theme.background_color)


async def test_timetable_theme_is_forced_light_even_if_model_returns_dark(image_generator):
    async def dark_timetable(prompt):
        return DocumentDraft(pages=[PageDraft(content=TIMETABLE_TABLE)], theme=DARK_THEME)

    pipeline = DocumentPipeline(text_generator=dark_timetable, image_generator=image_generator)

    result = await pipeline.generate(GenerationRequest(prompt="Exam week timetable", document_type="timetable"))

    assert result.theme.background_color == "#ffffff"
    assert _is_dark(result.theme.text_color)
    assert _is_dark(result.theme.heading_color)


async def test_dark_theme_is_kept_for_presentations(image_generator):
    async def dark_deck(prompt):
        return DocumentDraft(pages=[PageDraft(content="Hello")] * 3, theme=DARK_THEME)

    pipeline = DocumentPipeline(text_generator=dark_deck, image_generator=image_generator)

    result = await pipeline.generate(GenerationRequest(prompt="Deck", document_type="presentation"))

    assert result.theme.background_color == DARK_THEME.background_color


@pytest.mark.parametrize("images", [0, 1, 4, 6])
async def test_exactly_the_requested_number_of_images(pipeline, images):
    request = GenerationRequest(prompt="A report", document_type="report", page_count=6, num_images=images)

    result = await pipeline.generate(request)

    assert sum(1 for page in result.pages if page.image_data_uri) == images


async def test_extra_image_prompts_from_the_model_are_dropped(image_generator):
    pipeline = DocumentPipeline(
        text_generator=ScriptedTextGenerator(extra_image_prompts=2),
        image_generator=image_generator,
    )
    request = GenerationRequest(prompt="A report", page_count=5, num_images=2)

    result = await pipeline.generate(request)

    assert len(image_generator.calls) == 2
    assert [bool(p.image_data_uri) for p in result.pages] == [True, True, False, False, False]


async def test_one_failed_image_degrades_only_its_page(text_generator):
    failing = {"A vector diagram for page 2"}
    pipeline = DocumentPipeline(
        text_generator=text_generator,
        image_generator=RecordingImageGenerator(failing=failing),
    )
    request = GenerationRequest(prompt="A proposal", document_type="project-proposal", page_count=4, num_images=3)

    result = await pipeline.generate(request)

    assert len(result.pages) == 4
    assert [bool(p.image_data_uri) for p in result.pages] == [True, False, True, False]
    assert "<img" not in result.pages[1].content


async def test_essay_end_to_end(pipeline):
    request = GenerationRequest(prompt="An essay on rivers", document_type="essay", page_count=3, num_images=1, theme="minimalist")

    result = await pipeline.generate(request)

    assert len(result.pages) == 3
    with_images = [p for p in result.pages if p.image_data_uri]
    assert len(with_images) == 1
    # No placeholder in the markdown, so the image is appended to the page
    assert with_images[0].content.endswith(image_markup(with_images[0].image_data_uri))
    assert result.theme.background_color == "#f8f8f8"
    assert _is_dark(result.theme.text_color)
    assert result.is_presentation is False


async def test_placeholder_position_is_used_for_slides(pipeline):
    request = GenerationRequest(prompt="Pitch", document_type="presentation", page_count=2, num_images=2, generate_template=False)

    result = await pipeline.generate(request)

    # Title slide has no placeholder so its image is appended; slide 1 fills its placeholder
    title, first, second = result.pages[0], result.pages[1], result.pages[2]
    assert title.content.endswith(image_markup(title.image_data_uri))
    assert first.content.index("Point 1") < first.content.index(first.image_data_uri)
    # Slide 2 got no image, so its placeholder is dropped rather than left broken
    assert second.image_data_uri is None
    assert "<img" not in second.content
    assert all('src="placeholder"' not in page.content for page in result.pages)


async def test_failed_image_leaves_no_broken_placeholder(text_generator):
    pipeline = DocumentPipeline(
        text_generator=text_generator,
        image_generator=RecordingImageGenerator(failing={"A vector diagram for page 2"}),
    )
    request = GenerationRequest(prompt="Pitch", document_type="presentation", page_count=1, num_images=2, generate_template=False)

    result = await pipeline.generate(request)

    slide = result.pages[1]
    assert slide.image_data_uri is None
    assert slide.content == "<h1>Slide 1</h1><p>Point 1</p>"


# ---------------------------------------------------------------------------
# Text step failures
# ---------------------------------------------------------------------------

async def _empty_pages(prompt):
    return DocumentDraft(pages=[], theme=LIGHT_THEMES[DocumentThemeName.professional])


async def _no_theme(prompt):
    return DocumentDraft(pages=[PageDraft(content="text")], theme=None)


async def _nothing(prompt):
    return None


async def _provider_down(prompt):
    raise ConnectionError("provider unreachable")


@pytest.mark.parametrize("generator", [_empty_pages, _no_theme, _nothing, _provider_down])
async def test_text_failures_abort_the_pipeline(generator, image_generator):
    pipeline = DocumentPipeline(text_generator=generator, image_generator=image_generator)

    with pytest.raises(GenerationFailure):
        await pipeline.generate(GenerationRequest(prompt="An essay", num_images=2))

    assert image_generator.calls == []


async def test_generate_text_passes_the_built_prompt(text_generator):
    request = GenerationRequest(prompt="A letter", document_type="letter", page_count=2)

    draft = await generate_text(request, text_generator)

    assert len(draft.pages) == 2
    assert text_generator.prompts[0].request == request


def test_enforce_image_budget_keeps_earliest_prompts():
    draft = DocumentDraft(
        pages=[
            PageDraft(content="a", image_prompt="one"),
            PageDraft(content="b", image_prompt="   "),
            PageDraft(content="c", image_prompt="two"),
            PageDraft(content="d", image_prompt="three"),
        ],
        theme=LIGHT_THEMES[DocumentThemeName.professional],
    )

    trimmed = enforce_image_budget(draft, 2)

    assert [p.image_prompt for p in trimmed.pages] == ["one", None, "two", None]
    # The input draft is untouched
    assert draft.pages[3].image_prompt == "three"
