"""Quiz State - Tagged union of session states.

``Loading | Active | Finished``; every instance is immutable and only the
reducer in ``engine/session_engine.py`` produces new ones.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from .enums import QuestionOutcome, QuizPhase
from .schemas import Question


@dataclass(frozen=True)
class QuizSettings:
    """Choices made when the quiz starts; kept across restarts.

    Attributes:
        subject: Subject filter used to load questions (None = all)
        question_count: Number of questions requested
        time_per_question: Countdown start value in seconds
        skip_budget: Skips available per run
        timeout_consumes_skip: Whether a timeout spends a skip when one is left
        language: Display language of the questions
    """

    subject: Optional[str]
    question_count: int
    time_per_question: int
    skip_budget: int = 3
    timeout_consumes_skip: bool = False
    language: str = "en"


@dataclass(frozen=True)
class HistoryEntry:
    """One record per question left behind."""

    question_id: str
    choice: Optional[int]
    correct: bool
    seconds: int
    outcome: QuestionOutcome

    def to_dict(self) -> dict[str, Any]:
        return {
            "questionId": self.question_id,
            "choice": self.choice,
            "correct": self.correct,
            "seconds": self.seconds,
            "outcome": self.outcome.value,
        }


@dataclass(frozen=True)
class Loading:
    settings: QuizSettings
    phase: QuizPhase = field(default=QuizPhase.LOADING, init=False)


@dataclass(frozen=True)
class Active:
    """A question is on screen and the timers run."""

    settings: QuizSettings
    questions: tuple[Question, ...]
    index: int = 0
    score: int = 0
    answered_count: int = 0
    total_seconds: int = 0
    question_seconds: int = 0
    countdown: int = 0
    fifty_used: bool = False
    hint_used: bool = False
    skips_left: int = 0
    history: tuple[HistoryEntry, ...] = ()
    phase: QuizPhase = field(default=QuizPhase.ACTIVE, init=False)

    @property
    def current(self) -> Question:
        return self.questions[self.index]

    @property
    def is_last(self) -> bool:
        return self.index >= len(self.questions) - 1


@dataclass(frozen=True)
class Finished:
    """All questions done; timers stopped."""

    settings: QuizSettings
    questions: tuple[Question, ...]
    score: int = 0
    answered_count: int = 0
    total_seconds: int = 0
    skips_left: int = 0
    history: tuple[HistoryEntry, ...] = ()
    phase: QuizPhase = field(default=QuizPhase.FINISHED, init=False)


QuizState = Union[Loading, Active, Finished]
