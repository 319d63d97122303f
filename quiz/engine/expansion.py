"""Synthetic expansion of the base question set."""

from ..models.schemas import DEFAULT_SUBJECT, Question


def group_by_subject(questions: list[Question]) -> dict[str, list[Question]]:
    """Group by ``subject or "General"``, keeping first-seen subject order."""
    groups: dict[str, list[Question]] = {}
    for q in questions:
        groups.setdefault(q.subject or DEFAULT_SUBJECT, []).append(q)
    return groups


def expand_subject(subject: str, base: list[Question], count: int) -> list[Question]:
    """Cycle through ``base`` to emit exactly ``count`` numbered variants.

    Variant ``i`` (0-based) copies ``base[i % len(base)]`` with id
    ``{id}-auto-{i+1}`` and text ``{text} (Set {i+1})``.
    """
    if not base:
        return []
    expanded = []
    for i in range(count):
        source = base[i % len(base)]
        expanded.append(
            source.model_copy(
                update={
                    "id": f"{source.id}-auto-{i + 1}",
                    "question": f"{source.question} (Set {i + 1})",
                    "subject": subject,
                },
                deep=True,
            )
        )
    return expanded


def expand_per_subject(base: list[Question], per_subject: int) -> list[Question]:
    """Expand every subject of ``base`` to ``per_subject`` records."""
    expanded: list[Question] = []
    for subject, questions in group_by_subject(base).items():
        expanded.extend(expand_subject(subject, questions, per_subject))
    return expanded
