"""Lifeline views: fifty-fifty and hint never change state or score."""

from ..models.schemas import Question

OPTION_LABELS = "ABCDEFGHIJ"


def is_hidden_by_fifty_fifty(index: int, answer_index: int) -> bool:
    """Even-indexed options other than the answer and its successor are hidden."""
    return index != answer_index and index != answer_index + 1 and index % 2 == 0


def visible_options(question: Question, fifty_used: bool) -> list[int]:
    """Indices of the options still on screen."""
    indices = range(len(question.options))
    if not fifty_used:
        return list(indices)
    return [i for i in indices if not is_hidden_by_fifty_fifty(i, question.answer_index)]


def hint_label(question: Question) -> str:
    """Letter of the correct option ("A" for index 0)."""
    return OPTION_LABELS[question.answer_index]
