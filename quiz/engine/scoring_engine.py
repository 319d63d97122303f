"""Quiz Scoring Engine - Negative-marking score and run summary."""

from typing import Any, Sequence

from ..models.enums import QuestionOutcome
from ..models.state import HistoryEntry


class QuizScoringEngine:
    """Scoring rules for the education quiz.

    Marking scheme:
        - correct answer: +4
        - wrong answer: -1
        - skip or timeout: 0

    Example:
        >>> engine = QuizScoringEngine()
        >>> engine.delta(True) + engine.delta(False)
        3
    """

    CORRECT_POINTS = 4
    WRONG_POINTS = -1

    def delta(self, is_correct: bool) -> int:
        """Score change for one answered question."""
        return self.CORRECT_POINTS if is_correct else self.WRONG_POINTS

    def max_score(self, total_questions: int) -> int:
        return total_questions * self.CORRECT_POINTS

    def summarize(
        self, history: Sequence[HistoryEntry], total_questions: int | None = None
    ) -> dict[str, Any]:
        """Summarize a run.

        Args:
            history: One entry per question left behind
            total_questions: Questions in the run (defaults to len(history))

        Returns:
            Dict with counts per outcome, score, max_score, percentage and
            total_seconds (sum of time spent per question)
        """
        total = total_questions if total_questions is not None else len(history)
        answered = [e for e in history if e.outcome == QuestionOutcome.ANSWERED]
        correct = sum(1 for e in answered if e.correct)
        wrong = len(answered) - correct
        score = sum(self.delta(e.correct) for e in answered)
        max_score = self.max_score(total)
        percentage = round(max(score, 0) / max_score * 100, 1) if max_score else 0.0

        return {
            "total": total,
            "answered": len(answered),
            "correct": correct,
            "wrong": wrong,
            "skipped": sum(1 for e in history if e.outcome == QuestionOutcome.SKIPPED),
            "timed_out": sum(1 for e in history if e.outcome == QuestionOutcome.TIMED_OUT),
            "score": score,
            "max_score": max_score,
            "percentage": percentage,
            "total_seconds": sum(e.seconds for e in history),
        }
