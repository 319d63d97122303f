"""Quiz Events - Inputs of the session reducer."""

from dataclasses import dataclass
from typing import Optional, Union

from core.exceptions import ValidationError

from .enums import QuizEventType
from .schemas import Question


@dataclass(frozen=True)
class Loaded:
    """Questions fetched; starts the quiz."""

    questions: tuple[Question, ...]


@dataclass(frozen=True)
class Answer:
    choice: int


@dataclass(frozen=True)
class Skip:
    pass


@dataclass(frozen=True)
class Timeout:
    pass


@dataclass(frozen=True)
class Tick:
    """One second elapsed."""


@dataclass(frozen=True)
class FiftyFifty:
    pass


@dataclass(frozen=True)
class Hint:
    pass


@dataclass(frozen=True)
class Restart:
    pass


QuizEvent = Union[Loaded, Answer, Skip, Timeout, Tick, FiftyFifty, Hint, Restart]

_SIMPLE_EVENTS = {
    QuizEventType.SKIP: Skip,
    QuizEventType.TIMEOUT: Timeout,
    QuizEventType.TICK: Tick,
    QuizEventType.FIFTY_FIFTY: FiftyFifty,
    QuizEventType.HINT: Hint,
    QuizEventType.RESTART: Restart,
}


def event_from_request(event_type: QuizEventType, choice: Optional[int] = None) -> QuizEvent:
    """Build an event from its HTTP form.

    Raises:
        ValidationError: ``answer`` without a choice
    """
    if event_type == QuizEventType.ANSWER:
        if choice is None:
            raise ValidationError("choice is required for answer events")
        return Answer(choice=choice)
    return _SIMPLE_EVENTS[event_type]()
