"""Quiz Module - Question bank and education quiz.

Architecture:
- models/: Enums, Pydantic schemas, reducer events and state union
- engine/: expansion, lifelines, scoring, session reducer
- storage/: QuestionStore (JSON files), QuizSessionStore (in-memory)
- router.py: FastAPI endpoints
"""

from .engine import QuizScoringEngine, expand_per_subject, reduce
from .models import Active, Finished, Loading, Question, QuizSettings
from .storage import JsonFileQuestionRepository, QuestionStore, QuizSessionStore

__all__ = [
    # Models
    "Question",
    "QuizSettings",
    "Loading",
    "Active",
    "Finished",
    # Engines
    "QuizScoringEngine",
    "expand_per_subject",
    "reduce",
    # Storage
    "JsonFileQuestionRepository",
    "QuestionStore",
    "QuizSessionStore",
]
