"""Quiz Session Store - In-memory quiz sessions.

Sessions are transient: they live in the process and vanish on restart.
Idle sessions expire after ``ttl_seconds``; past ``max_sessions`` the least
recently used one is dropped.
"""

import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from core.exceptions import NotFoundError
from core.logger import get_logger

from ..engine.session_engine import reduce
from ..models.events import QuizEvent
from ..models.state import QuizState

logger = get_logger("quiz_sessions")


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class QuizSession:
    session_id: str
    state: QuizState
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)


class QuizSessionStore:
    """Session id -> current state, oldest activity first.

    Example:
        >>> store = QuizSessionStore(max_sessions=100, ttl_seconds=600)
        >>> session = store.create(begin(settings, questions))
        >>> store.apply(session.session_id, Answer(choice=2))
    """

    def __init__(self, max_sessions: int = 1000, ttl_seconds: int = 3600) -> None:
        self.max_sessions = max(1, max_sessions)
        self.ttl = timedelta(seconds=ttl_seconds)
        self._sessions: OrderedDict[str, QuizSession] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def _evict(self, now: datetime) -> None:
        """Drop expired sessions, then the least recently used over the cap."""
        expired = [sid for sid, s in self._sessions.items() if now - s.updated_at > self.ttl]
        for sid in expired:
            del self._sessions[sid]

        dropped = 0
        while len(self._sessions) >= self.max_sessions:
            self._sessions.popitem(last=False)
            dropped += 1

        if expired or dropped:
            logger.info("Quiz sessions evicted", expired=len(expired), dropped=dropped)

    def create(self, state: QuizState) -> QuizSession:
        self._evict(_now())
        session = QuizSession(session_id=uuid.uuid4().hex, state=state)
        self._sessions[session.session_id] = session
        logger.info("Quiz session created", session_id=session.session_id, phase=state.phase.value)
        return session

    def get(self, session_id: str) -> QuizSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise NotFoundError("Quiz session not found", details={"session_id": session_id})
        if _now() - session.updated_at > self.ttl:
            del self._sessions[session_id]
            raise NotFoundError("Quiz session not found", details={"session_id": session_id})
        return session

    def apply(self, session_id: str, event: QuizEvent) -> QuizSession:
        """Run ``event`` through the reducer and keep the result.

        Raises:
            NotFoundError: Unknown or expired session id
        """
        session = self.get(session_id)
        next_state = reduce(session.state, event)
        session.updated_at = _now()
        self._sessions.move_to_end(session_id)
        if next_state is not session.state:
            session.state = next_state
        else:
            logger.debug("Quiz event ignored", session_id=session_id, event_type=type(event).__name__)
        return session

    def delete(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def clear(self) -> None:
        self._sessions.clear()
