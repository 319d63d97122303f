"""Quiz Storage - Question bank and in-memory sessions."""

from .question_store import JsonFileQuestionRepository, QuestionRepository, QuestionStore
from .session_store import QuizSession, QuizSessionStore

__all__ = [
    "QuestionRepository",
    "JsonFileQuestionRepository",
    "QuestionStore",
    "QuizSession",
    "QuizSessionStore",
]
