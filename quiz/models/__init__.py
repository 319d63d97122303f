"""Quiz Models - Enums, Schemas, Events and State."""

from .enums import Language, QuestionOutcome, QuizEventType, QuizPhase
from .events import (
    Answer,
    FiftyFifty,
    Hint,
    Loaded,
    QuizEvent,
    Restart,
    Skip,
    Tick,
    Timeout,
    event_from_request,
)
from .schemas import (
    Question,
    QuestionDeleteRequest,
    QuestionDeleteResponse,
    QuestionTranslation,
    SessionEventRequest,
    StartSessionRequest,
)
from .state import Active, Finished, HistoryEntry, Loading, QuizSettings, QuizState

__all__ = [
    # Enums
    "Language",
    "QuestionOutcome",
    "QuizEventType",
    "QuizPhase",
    # Events
    "Answer",
    "FiftyFifty",
    "Hint",
    "Loaded",
    "QuizEvent",
    "Restart",
    "Skip",
    "Tick",
    "Timeout",
    "event_from_request",
    # Schemas
    "Question",
    "QuestionTranslation",
    "QuestionDeleteRequest",
    "QuestionDeleteResponse",
    "StartSessionRequest",
    "SessionEventRequest",
    # State
    "Active",
    "Finished",
    "HistoryEntry",
    "Loading",
    "QuizSettings",
    "QuizState",
]
