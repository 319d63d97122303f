"""Quiz Router - Question bank CRUD and server-side quiz sessions."""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, status

import app_state
from config import AppConfig
from core.exceptions import ValidationError
from core.logger import get_logger
from utils.validators import parse_int

from .engine.lifelines import OPTION_LABELS, hint_label, visible_options
from .engine.scoring_engine import QuizScoringEngine
from .engine.session_engine import start
from .models.enums import Language
from .models.events import Loaded, event_from_request
from .models.schemas import (
    Question,
    QuestionDeleteRequest,
    QuestionDeleteResponse,
    SessionEventRequest,
    StartSessionRequest,
)
from .models.state import Active, Finished, QuizSettings
from .storage.question_store import QuestionStore
from .storage.session_store import QuizSession, QuizSessionStore

logger = get_logger("quiz_router")

router = APIRouter(prefix="/api", tags=["Quiz"])

ID_REQUIRED = "id required"

# =============================================================================
# DEPENDENCY INJECTION
# =============================================================================


def get_question_store() -> QuestionStore:
    return app_state.get_question_store()


def get_session_store() -> QuizSessionStore:
    return app_state.get_session_store()


def get_scoring_engine() -> QuizScoringEngine:
    return QuizScoringEngine()


def get_app_config() -> AppConfig:
    return app_state.get_app_config()


# =============================================================================
# QUESTION BANK
# =============================================================================


@router.get("/questions")
async def list_questions(
    subject: Optional[str] = None,
    limit: Optional[str] = None,
    lang: Optional[str] = None,
    store: QuestionStore = Depends(get_question_store),
) -> list[dict[str, Any]]:
    """Expanded base questions plus custom ones.

    - ``subject``: case-insensitive exact match
    - ``limit``: truncates when > 0
    - ``lang=hi``: Hindi text/options where a translation exists; other
      values fall back to English
    """
    language = Language.resolve(lang)
    questions = store.list(subject=subject, limit=parse_int(limit), language=language)
    logger.debug("Questions listed", subject=subject, lang=language.value, count=len(questions))
    return [q.to_wire() for q in questions]


@router.post("/questions", status_code=status.HTTP_201_CREATED)
async def create_question(
    payload: dict[str, Any] = Body(...),
    store: QuestionStore = Depends(get_question_store),
) -> dict[str, Any]:
    """Create a custom question; ``id`` and ``subject`` are filled when absent."""
    return store.create(payload).to_wire()


@router.put("/questions")
async def update_question(
    payload: dict[str, Any] = Body(...),
    store: QuestionStore = Depends(get_question_store),
) -> dict[str, Any]:
    """Merge the body into the custom question named by ``id``."""
    question_id = payload.get("id")
    if not question_id:
        raise ValidationError(ID_REQUIRED)
    return store.update(str(question_id), payload).to_wire()


@router.delete("/questions", response_model=QuestionDeleteResponse)
async def delete_question(
    payload: Optional[QuestionDeleteRequest] = None,
    store: QuestionStore = Depends(get_question_store),
):
    """Delete by ``id``; an unknown id still answers ``{"success": true}``."""
    if payload is None or not payload.id:
        raise ValidationError(ID_REQUIRED)
    store.delete(payload.id)
    return QuestionDeleteResponse(success=True)


# =============================================================================
# QUIZ SESSIONS
# =============================================================================


def _question_view(state: Active) -> dict[str, Any]:
    question: Question = state.current
    options = [
        {"index": i, "label": OPTION_LABELS[i], "text": question.options[i]}
        for i in visible_options(question, state.fifty_used)
    ]
    return {
        "id": question.id,
        "question": question.question,
        "subject": question.subject,
        "options": options,
    }


def _session_view(session: QuizSession, scoring: QuizScoringEngine) -> dict[str, Any]:
    """Client view of a session; the answer index stays hidden while active."""
    state = session.state
    settings = state.settings
    view: dict[str, Any] = {
        "sessionId": session.session_id,
        "phase": state.phase.value,
        "settings": {
            "subject": settings.subject,
            "questionCount": settings.question_count,
            "timePerQuestion": settings.time_per_question,
            "skipBudget": settings.skip_budget,
            "timeoutConsumesSkip": settings.timeout_consumes_skip,
            "lang": settings.language,
        },
    }

    if isinstance(state, (Active, Finished)):
        view.update(
            {
                "total": len(state.questions),
                "score": state.score,
                "answeredCount": state.answered_count,
                "totalSeconds": state.total_seconds,
                "skipsLeft": state.skips_left,
                "history": [entry.to_dict() for entry in state.history],
            }
        )

    if isinstance(state, Active):
        view.update(
            {
                "index": state.index,
                "questionSeconds": state.question_seconds,
                "countdown": state.countdown,
                "fiftyUsed": state.fifty_used,
                "hintUsed": state.hint_used,
                "hint": hint_label(state.current) if state.hint_used else None,
                "question": _question_view(state),
            }
        )

    if isinstance(state, Finished):
        view["summary"] = scoring.summarize(state.history, len(state.questions))

    return view


@router.post("/quiz/sessions", status_code=status.HTTP_201_CREATED)
async def start_session(
    request: StartSessionRequest,
    questions: QuestionStore = Depends(get_question_store),
    sessions: QuizSessionStore = Depends(get_session_store),
    scoring: QuizScoringEngine = Depends(get_scoring_engine),
    config: AppConfig = Depends(get_app_config),
) -> dict[str, Any]:
    """Load questions for the subject and start a run at question 0."""
    settings = QuizSettings(
        subject=request.subject or None,
        question_count=request.question_count,
        time_per_question=request.time_per_question or config.quiz_time_per_question,
        skip_budget=config.quiz_skip_budget,
        timeout_consumes_skip=config.quiz_timeout_consumes_skip,
        language=request.lang.value,
    )

    session = sessions.create(start(settings))
    loaded = questions.list(
        subject=settings.subject, limit=settings.question_count, language=settings.language
    )
    session = sessions.apply(session.session_id, Loaded(questions=tuple(loaded)))

    logger.info(
        "Quiz started",
        session_id=session.session_id,
        subject=settings.subject,
        questions=len(loaded),
    )
    return _session_view(session, scoring)


@router.get("/quiz/sessions/{session_id}")
async def get_session(
    session_id: str,
    sessions: QuizSessionStore = Depends(get_session_store),
    scoring: QuizScoringEngine = Depends(get_scoring_engine),
) -> dict[str, Any]:
    return _session_view(sessions.get(session_id), scoring)


@router.post("/quiz/sessions/{session_id}/events")
async def send_event(
    session_id: str,
    request: SessionEventRequest,
    sessions: QuizSessionStore = Depends(get_session_store),
    scoring: QuizScoringEngine = Depends(get_scoring_engine),
) -> dict[str, Any]:
    """Apply one event (answer, skip, timeout, tick, fifty_fifty, hint, restart).

    Events that are not legal in the current phase leave the session as is.
    """
    event = event_from_request(request.type, request.choice)
    session = sessions.apply(session_id, event)
    return _session_view(session, scoring)
