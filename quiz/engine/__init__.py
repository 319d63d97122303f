"""Quiz Engines - Expansion, lifelines, scoring and the session reducer."""

from .expansion import expand_per_subject, expand_subject
from .lifelines import hint_label, visible_options
from .scoring_engine import QuizScoringEngine
from .session_engine import begin, reduce, start

__all__ = [
    "expand_per_subject",
    "expand_subject",
    "hint_label",
    "visible_options",
    "QuizScoringEngine",
    "begin",
    "reduce",
    "start",
]
