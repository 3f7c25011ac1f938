"""
AI agents for Inkwell.

Agents
------
- **document_text_agent**   – Structured pages + visual theme for a document
- **document_editor_agent** – Professional revision of raw document text
- **document_analysis_agent** – Summary of a document plus an answer to a question
- **short_notes_agent**     – Revision notes from chapter content
- **booklet_solver_agent**  – Worked answers for a question booklet
- **resume_agent**          – Resume draft from skills and experience
- **assistant_agent**       – In-app help chat
- **handwriting_agent**     – Rewrites text the way a person would hand-write it

``generate_illustration`` is the one flow without an agent: it sends a built
prompt straight to the image generator.

Each agent has a thin coroutine wrapper so controllers never touch
pydantic-ai objects directly.
"""

import logging

from pydantic_ai import Agent, ModelRetry, RunContext

from app.core.config import settings
from app.core.errors import GenerationFailure
from app.core.export import render_handwritten_note
from app.core.image_generation import ImageGenerator, generate_openai_image
from app.core.prompt_builder import DocumentPrompt, build_document_prompt, build_illustration_prompt
from app.schemas.assistants import (
    AnalyzeDocumentRequest,
    AnalyzeDocumentResponse,
    ChatRequest,
    ChatResponse,
    EditDocumentRequest,
    EditDocumentResponse,
    HandwritingRequest,
    HandwritingResponse,
    HandwrittenText,
    HumanizeLevel,
    IllustrationRequest,
    IllustrationResponse,
    ResumeRequest,
    ResumeResponse,
    ShortNotesRequest,
    ShortNotesResponse,
    SolveBookletRequest,
    SolveBookletResponse,
)
from app.schemas.generation import DocumentDraft, GenerationRequest

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# 1.  Document text agent  (pages + theme)
# ---------------------------------------------------------------------------

_DOCUMENT_SYSTEM_PROMPT = """\
You are an AI document and art director.  You write complete, well-structured \
documents and choose a matching visual theme for them.

Rules:
- Return exactly the number of pages (or slides) you are asked for.
- Write page content in markdown: headings, bold text, lists and tables where \
  appropriate.
- Where a page gets an image, put an image tag like `![Alt text](placeholder)` \
  in its content at the spot the image should appear.
- Always return a theme with CSS color values and a border/background prompt.
"""

document_text_agent = Agent(
    model=settings.TEXT_MODEL,
    output_type=DocumentDraft,
    deps_type=GenerationRequest,
    system_prompt=_DOCUMENT_SYSTEM_PROMPT,
    retries=settings.TEXT_OUTPUT_RETRIES,
    defer_model_check=True,
)


@document_text_agent.output_validator
async def _check_document_draft(
    ctx: RunContext[GenerationRequest], output: DocumentDraft
) -> DocumentDraft:
    request = ctx.deps
    if not output.pages or output.theme is None:
        raise ModelRetry("Return both a non-empty 'pages' list and a 'theme'.")

    expected_pages = build_document_prompt(request).expected_page_count
    if len(output.pages) != expected_pages:
        raise ModelRetry(
            f"Return exactly {expected_pages} pages; you returned {len(output.pages)}."
        )

    image_prompts = sum(1 for prompt in output.image_prompts if prompt.strip())
    if image_prompts != request.image_budget:
        raise ModelRetry(
            f"Write exactly {request.image_budget} non-empty 'image_prompt' values; "
            f"you wrote {image_prompts}."
        )
    return output


async def run_document_text_agent(prompt: DocumentPrompt) -> DocumentDraft:
    """Default text generator for the document pipeline."""
    result = await document_text_agent.run(prompt.render(), deps=prompt.request)
    return result.output


# ---------------------------------------------------------------------------
# 2.  Professional editor agent
# ---------------------------------------------------------------------------

_EDITOR_SYSTEM_PROMPT = """\
You are an advanced professional document editor.  Revise and enhance the \
document text you are given.

Goals:
1. Tone & clarity – formal, engaging and clear; active voice; no filler or \
   redundancy.
2. Grammar & spelling – correct every grammar, punctuation and spelling issue.
3. Structure & flow – improve the logical flow; merge or split paragraphs where \
   needed; keep terminology consistent.
4. Headings – add clear, logical headings and subheadings.
5. Executive summary – open with a 3-6 line executive summary of the core content.
6. Content – preserve technical accuracy, add transitions, and sharpen weak \
   statements.

Return the revised document as clean markdown (`#` for main headings, `##` for \
subheadings, bullet points where needed) and nothing else.
"""

document_editor_agent = Agent(
    model=settings.ASSISTANT_MODEL,
    output_type=EditDocumentResponse,
    system_prompt=_EDITOR_SYSTEM_PROMPT,
    defer_model_check=True,
)


# ---------------------------------------------------------------------------
# 3.  Document analysis agent
# ---------------------------------------------------------------------------

_ANALYSIS_SYSTEM_PROMPT = """\
You are an expert document analyst.  Summarise the document you are given in a \
few clear paragraphs, then answer the user's question using only information \
from the document.  If the document does not contain the answer, say so.
"""

document_analysis_agent = Agent(
    model=settings.ASSISTANT_MODEL,
    output_type=AnalyzeDocumentResponse,
    system_prompt=_ANALYSIS_SYSTEM_PROMPT,
    defer_model_check=True,
)


# ---------------------------------------------------------------------------
# 4.  Short notes agent
# ---------------------------------------------------------------------------

_SHORT_NOTES_SYSTEM_PROMPT = """\
You are an expert teacher who writes revision notes.  Turn the chapter content \
you are given into short notes in markdown: headings per topic, bullet points, \
key definitions and formulas in bold.

Detail levels:
- concise: only the essential facts, one line each.
- detailed: key points with short explanations.
- comprehensive: every concept with explanation and examples.
"""

short_notes_agent = Agent(
    model=settings.ASSISTANT_MODEL,
    output_type=ShortNotesResponse,
    system_prompt=_SHORT_NOTES_SYSTEM_PROMPT,
    defer_model_check=True,
)


# ---------------------------------------------------------------------------
# 5.  Booklet solver agent
# ---------------------------------------------------------------------------

_BOOKLET_SYSTEM_PROMPT = """\
You are an expert tutor.  The document you are given is a question booklet or \
worksheet.  Answer every question in order, in markdown, repeating each \
question as a heading before its answer.

Detail levels:
- short: the answer only.
- medium: the answer with a brief justification.
- detailed: a full worked solution with every step explained.
"""

booklet_solver_agent = Agent(
    model=settings.ASSISTANT_MODEL,
    output_type=SolveBookletResponse,
    system_prompt=_BOOKLET_SYSTEM_PROMPT,
    defer_model_check=True,
)


# ---------------------------------------------------------------------------
# 6.  Resume agent
# ---------------------------------------------------------------------------

_RESUME_SYSTEM_PROMPT = """\
You are a professional resume writer.  Using the skills and experience you are \
given, draft a polished, ATS-friendly resume with a short professional summary, \
a skills section and an experience section with achievement-oriented bullet \
points.  Never invent employers, dates or qualifications.
"""

resume_agent = Agent(
    model=settings.ASSISTANT_MODEL,
    output_type=ResumeResponse,
    system_prompt=_RESUME_SYSTEM_PROMPT,
    defer_model_check=True,
)


# ---------------------------------------------------------------------------
# 7.  Assistant chat agent
# ---------------------------------------------------------------------------

_ASSISTANT_SYSTEM_PROMPT = """\
You are the friendly help assistant of Inkwell, an AI document studio.  Inkwell \
can generate essays, reports, letters, meeting agendas, project proposals, \
presentations and timetables (with AI images and themes), export them as PDF, \
DOCX or TXT, edit documents professionally, analyse documents, write short \
notes, solve question booklets, draft resumes, generate infographic illustrations \
and turn typed text into handwritten-style notes.

Answer the user's question briefly and helpfully.  If the question is unrelated \
to documents or the app, still answer politely and concisely.
"""

assistant_agent = Agent(
    model=settings.ASSISTANT_MODEL,
    output_type=ChatResponse,
    system_prompt=_ASSISTANT_SYSTEM_PROMPT,
    defer_model_check=True,
)


# ---------------------------------------------------------------------------
# 8.  Handwriting agent
# ---------------------------------------------------------------------------

_HANDWRITING_SYSTEM_PROMPT = """\
You turn typed text into the words a person would actually put down when writing \
it out by hand in their notes.  Keep the meaning and the order of ideas.  Return \
plain text only, no markdown, with paragraphs separated by blank lines.

Humanize levels:
- medium: keep the wording; split very long sentences the way a writer pauses.
- high: natural note-taking style with common contractions and the odd \
  abbreviation (e.g. "w/", "&").
- ultra: loose personal phrasing, arrows (->) between linked ideas, short asides.
- max: quick personal notes: fragments, heavy abbreviation, arrows and dashes.
"""

handwriting_agent = Agent(
    model=settings.ASSISTANT_MODEL,
    output_type=HandwrittenText,
    system_prompt=_HANDWRITING_SYSTEM_PROMPT,
    defer_model_check=True,
)


# ===================================================================
# Wrappers
# ===================================================================

async def _run(agent: Agent, prompt: str, flow: str):
    try:
        result = await agent.run(prompt)
    except Exception as e:
        logger.warning("%s call failed: %s", flow, e)
        raise GenerationFailure(f"{flow} failed: {e}") from e
    return result.output


async def edit_document(payload: EditDocumentRequest) -> EditDocumentResponse:
    prompt = f'Document to edit:\n\n"""\n{payload.document_content}\n"""'
    return await _run(document_editor_agent, prompt, "Document editing")


async def analyze_document(payload: AnalyzeDocumentRequest) -> AnalyzeDocumentResponse:
    prompt = (
        f'Document:\n\n"""\n{payload.document_content}\n"""\n\n'
        f"Question: {payload.user_question}"
    )
    return await _run(document_analysis_agent, prompt, "Document analysis")


async def generate_short_notes(payload: ShortNotesRequest) -> ShortNotesResponse:
    prompt = (
        f"Detail level: {payload.detail_level.value}\n\n"
        f'Chapter content:\n\n"""\n{payload.chapter_content}\n"""'
    )
    return await _run(short_notes_agent, prompt, "Short notes")


async def solve_booklet(payload: SolveBookletRequest) -> SolveBookletResponse:
    prompt = (
        f"Detail level: {payload.detail_level.value}\n\n"
        f'Booklet:\n\n"""\n{payload.document_content}\n"""'
    )
    return await _run(booklet_solver_agent, prompt, "Booklet solving")


async def generate_resume(payload: ResumeRequest) -> ResumeResponse:
    prompt = f"Skills:\n{payload.skills}\n\nExperience:\n{payload.experience}"
    return await _run(resume_agent, prompt, "Resume drafting")


async def chat_with_assistant(payload: ChatRequest) -> ChatResponse:
    return await _run(assistant_agent, payload.question, "Assistant chat")


async def convert_to_handwriting(payload: HandwritingRequest) -> HandwritingResponse:
    """Render the text as a handwritten note; ``none`` skips the rewrite."""
    text = payload.source_text
    if payload.humanize_level != HumanizeLevel.none:
        prompt = (
            f"Humanize level: {payload.humanize_level.value}\n\n"
            f'Text:\n\n"""\n{payload.source_text}\n"""'
        )
        note = await _run(handwriting_agent, prompt, "Handwriting conversion")
        text = note.note_text
    return HandwritingResponse(
        handwritten_note_html=render_handwritten_note(text, payload.font_name.value)
    )


async def generate_illustration(
    payload: IllustrationRequest,
    generator: ImageGenerator | None = None,
) -> IllustrationResponse:
    generator = generator or generate_openai_image
    try:
        data_uri = await generator(build_illustration_prompt(payload))
    except Exception as e:
        logger.warning("Illustration call failed: %s", e)
        raise GenerationFailure(f"Illustration failed: {e}") from e
    if not data_uri:
        raise GenerationFailure("Illustration failed: no image returned")
    return IllustrationResponse(image_data_uri=data_uri)
