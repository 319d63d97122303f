"""Quiz Session Engine - Pure reducer over the quiz state union.

``reduce(state, event)`` returns the next state and never mutates its
input. Events that are not legal in the current state return the very same
state object, so callers can detect a no-op with ``is``.

Transitions:
    Loading  --Loaded-->            Active(index 0) | Finished (no questions)
    Active   --Answer/Skip-->        Active(index + 1) | Finished
    Active   --Timeout-->            as Answer/Skip, only once countdown is 0
    Active   --Tick-->               Active (countdown 0 applies Timeout)
    Active   --FiftyFifty/Hint-->    Active (once per question)
    Finished --Restart-->            Active(index 0), same settings and questions
"""

from dataclasses import replace
from typing import Optional

from ..models.enums import QuestionOutcome
from ..models.events import (
    Answer,
    FiftyFifty,
    Hint,
    Loaded,
    QuizEvent,
    Restart,
    Skip,
    Tick,
    Timeout,
)
from ..models.schemas import Question
from ..models.state import Active, Finished, HistoryEntry, Loading, QuizSettings, QuizState
from .lifelines import visible_options
from .scoring_engine import QuizScoringEngine

_scoring = QuizScoringEngine()


def start(settings: QuizSettings) -> Loading:
    return Loading(settings=settings)


def begin(settings: QuizSettings, questions: tuple[Question, ...]) -> QuizState:
    """First state of a run over ``questions``."""
    if not questions:
        return Finished(settings=settings, questions=(), skips_left=settings.skip_budget)
    return Active(
        settings=settings,
        questions=questions,
        countdown=settings.time_per_question,
        skips_left=settings.skip_budget,
    )


def _leave_question(
    state: Active,
    outcome: QuestionOutcome,
    choice: Optional[int] = None,
    correct: bool = False,
    score_delta: int = 0,
    answered: int = 0,
    skips_used: int = 0,
) -> QuizState:
    """Record the current question and move on (or finish after the last)."""
    entry = HistoryEntry(
        question_id=state.current.id,
        choice=choice,
        correct=correct,
        seconds=state.question_seconds,
        outcome=outcome,
    )
    history = state.history + (entry,)
    score = state.score + score_delta
    answered_count = state.answered_count + answered
    skips_left = state.skips_left - skips_used

    if state.is_last:
        return Finished(
            settings=state.settings,
            questions=state.questions,
            score=score,
            answered_count=answered_count,
            total_seconds=state.total_seconds,
            skips_left=skips_left,
            history=history,
        )

    return replace(
        state,
        index=state.index + 1,
        score=score,
        answered_count=answered_count,
        skips_left=skips_left,
        history=history,
        question_seconds=0,
        countdown=state.settings.time_per_question,
        fifty_used=False,
        hint_used=False,
    )


def _answer(state: Active, choice: int) -> QuizState:
    if choice not in visible_options(state.current, state.fifty_used):
        return state
    correct = choice == state.current.answer_index
    return _leave_question(
        state,
        QuestionOutcome.ANSWERED,
        choice=choice,
        correct=correct,
        score_delta=_scoring.delta(correct),
        answered=1,
    )


def _skip(state: Active) -> QuizState:
    if state.skips_left <= 0:
        return state
    return _leave_question(state, QuestionOutcome.SKIPPED, skips_used=1)


def _timeout(state: Active) -> QuizState:
    spends_skip = state.settings.timeout_consumes_skip and state.skips_left > 0
    return _leave_question(state, QuestionOutcome.TIMED_OUT, skips_used=1 if spends_skip else 0)


def _tick(state: Active) -> QuizState:
    ticked = replace(
        state,
        total_seconds=state.total_seconds + 1,
        question_seconds=state.question_seconds + 1,
        countdown=state.countdown - 1,
    )
    if ticked.countdown <= 0:
        return _timeout(ticked)
    return ticked


def reduce(state: QuizState, event: QuizEvent) -> QuizState:
    """Apply ``event`` to ``state``.

    Args:
        state: Current session state
        event: Event to apply

    Returns:
        Next state, or ``state`` itself when the event is not legal
    """
    if isinstance(state, Loading):
        if isinstance(event, Loaded):
            return begin(state.settings, tuple(event.questions))
        return state

    if isinstance(state, Finished):
        if isinstance(event, Restart):
            return begin(state.settings, state.questions)
        return state

    if isinstance(event, Answer):
        return _answer(state, event.choice)
    if isinstance(event, Skip):
        return _skip(state)
    if isinstance(event, Timeout):
        # Legal only once the countdown has run out
        return _timeout(state) if state.countdown <= 0 else state
    if isinstance(event, Tick):
        return _tick(state)
    if isinstance(event, FiftyFifty):
        return state if state.fifty_used else replace(state, fifty_used=True)
    if isinstance(event, Hint):
        return state if state.hint_used else replace(state, hint_used=True)

    # Loaded and Restart are not legal while active
    return state
