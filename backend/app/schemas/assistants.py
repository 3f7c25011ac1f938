from enum import Enum

from pydantic import BaseModel, Field


class NotesDetailLevel(str, Enum):
    concise = "concise"
    detailed = "detailed"
    comprehensive = "comprehensive"


class SolverDetailLevel(str, Enum):
    short = "short"
    medium = "medium"
    detailed = "detailed"


class EditDocumentRequest(BaseModel):
    document_content: str = Field(min_length=1)


class EditDocumentResponse(BaseModel):
    edited_content: str = Field(description="The revised document in clean markdown.")


class AnalyzeDocumentRequest(BaseModel):
    document_content: str = Field(min_length=50)
    user_question: str = Field(min_length=5)


class AnalyzeDocumentResponse(BaseModel):
    summary: str = Field(description="A concise summary of the document.")
    answer: str = Field(description="The answer to the user's question, based on the document.")


class ShortNotesRequest(BaseModel):
    chapter_content: str = Field(min_length=100)
    detail_level: NotesDetailLevel = NotesDetailLevel.detailed


class ShortNotesResponse(BaseModel):
    short_notes: str = Field(description="Revision notes in markdown.")


class SolveBookletRequest(BaseModel):
    document_content: str = Field(min_length=100)
    detail_level: SolverDetailLevel = SolverDetailLevel.detailed


class SolveBookletResponse(BaseModel):
    solved_answers: str = Field(description="Answers to every question, in markdown.")


class ResumeRequest(BaseModel):
    skills: str = Field(min_length=10)
    experience: str = Field(min_length=20)


class ResumeResponse(BaseModel):
    resume_draft: str = Field(description="The drafted resume.")


class ChatRequest(BaseModel):
    question: str = Field(min_length=1)


class ChatResponse(BaseModel):
    answer: str


class ColorPalette(str, Enum):
    vibrant = "vibrant"
    professional = "professional"
    pastel = "pastel"
    monochromatic = "monochromatic"


class IllustrationRequest(BaseModel):
    title: str = Field(min_length=3)
    description: str = Field(min_length=10)
    num_items: int = Field(default=4, ge=2, le=10)
    color_palette: ColorPalette = ColorPalette.vibrant


class IllustrationResponse(BaseModel):
    image_data_uri: str


class HandwritingFont(str, Enum):
    caveat = "Caveat"
    dancing_script = "Dancing Script"
    patrick_hand = "Patrick Hand"
    indie_flower = "Indie Flower"
    kalam = "Kalam"
    reenie_beanie = "Reenie Beanie"
    rock_salt = "Rock Salt"


class HumanizeLevel(str, Enum):
    none = "none"
    medium = "medium"
    high = "high"
    ultra = "ultra"
    max = "max"


class HandwritingRequest(BaseModel):
    source_text: str = Field(min_length=20)
    font_name: HandwritingFont = HandwritingFont.patrick_hand
    humanize_level: HumanizeLevel = HumanizeLevel.high


class HandwrittenText(BaseModel):
    note_text: str = Field(
        description="The text as a person would write it in their notes; paragraphs separated by blank lines."
    )


class HandwritingResponse(BaseModel):
    handwritten_note_html: str
