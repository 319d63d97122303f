"""Quiz Enums - Phases, outcomes and event types."""

from enum import Enum
from typing import Optional


class QuizPhase(str, Enum):
    """Lifecycle phase of a quiz session."""

    LOADING = "loading"
    ACTIVE = "active"
    FINISHED = "finished"


class QuestionOutcome(str, Enum):
    """How a question was left behind."""

    ANSWERED = "answered"
    SKIPPED = "skipped"
    TIMED_OUT = "timed_out"


class QuizEventType(str, Enum):
    """Event names accepted over HTTP."""

    ANSWER = "answer"
    SKIP = "skip"
    TIMEOUT = "timeout"
    TICK = "tick"
    FIFTY_FIFTY = "fifty_fifty"
    HINT = "hint"
    RESTART = "restart"


class Language(str, Enum):
    """Question display language; anything unknown reads as English."""

    EN = "en"
    HI = "hi"

    @classmethod
    def resolve(cls, value: Optional[str]) -> "Language":
        try:
            return cls(value)
        except ValueError:
            return cls.EN
