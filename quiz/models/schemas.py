"""Quiz Schemas - Pydantic models for questions and request/response bodies."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .enums import Language, QuizEventType

DEFAULT_SUBJECT = "General"
OPTIONS_PER_QUESTION = 4


class QuestionTranslation(BaseModel):
    """Per-language override of text and options."""

    question: Optional[str] = None
    options: Optional[list[str]] = None

    @property
    def is_complete(self) -> bool:
        return bool(self.question) and isinstance(self.options, list)


class Question(BaseModel):
    """Multiple-choice question as stored in the question files."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    id: str = Field(..., description="Question id (q<epoch ms> for custom records)")
    question: str = Field(..., description="Question text")
    options: list[str] = Field(..., description="Answer options, in display order")
    answer_index: int = Field(..., alias="answerIndex", description="Index of the correct option")
    subject: Optional[str] = Field(default=DEFAULT_SUBJECT, description="Free-text subject tag")
    translations: Optional[dict[str, QuestionTranslation]] = Field(
        default=None, description="Overrides keyed by language code (hi)"
    )

    def to_wire(self) -> dict[str, Any]:
        """camelCase dict as written to disk and served over HTTP."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def localized(self, language: str) -> "Question":
        """Copy with text/options from ``translations[language]`` when complete."""
        translation = (self.translations or {}).get(language)
        if translation is None or not translation.is_complete:
            return self
        return self.model_copy(
            update={"question": translation.question, "options": list(translation.options)}
        )


# =============================================================================
# QUESTION CRUD BODIES
# =============================================================================


class QuestionDeleteRequest(BaseModel):
    id: Optional[str] = None


class QuestionDeleteResponse(BaseModel):
    success: bool = True


# =============================================================================
# QUIZ SESSION BODIES
# =============================================================================


class StartSessionRequest(BaseModel):
    """Start a quiz over the stored questions."""

    model_config = ConfigDict(populate_by_name=True)

    subject: Optional[str] = Field(default=None, description="Subject filter (all when empty)")
    question_count: int = Field(
        default=10, ge=1, le=500, alias="questionCount", description="Questions to play"
    )
    time_per_question: Optional[int] = Field(
        default=None,
        ge=1,
        le=600,
        alias="timePerQuestion",
        description="Countdown seconds per question (config default when absent)",
    )
    lang: Language = Field(default=Language.EN, description="Question language")


class SessionEventRequest(BaseModel):
    """One engine event; ``choice`` only for ``answer``."""

    type: QuizEventType
    choice: Optional[int] = None
