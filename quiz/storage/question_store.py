"""Question Store - Flat-file question bank behind a repository interface.

Two files back the store:
    - base file: read-only seed questions, expanded per subject at read time
    - custom file: questions created through the admin CRUD, rewritten whole
      on every mutation

Writes are not coordinated across requests; the last writer wins.
"""

from __future__ import annotations

import json
import os
import tempfile
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from core.exceptions import NotFoundError, UpstreamUnavailable, ValidationError
from core.logger import get_logger

from ..engine.expansion import expand_per_subject
from ..models.enums import Language
from ..models.schemas import DEFAULT_SUBJECT, OPTIONS_PER_QUESTION, Question

logger = get_logger("question_store")

REQUIRED_FIELDS = ("question", "options", "answerIndex")
REQUIRED_MESSAGE = "question, options, answerIndex required"


# =============================================================================
# REPOSITORY
# =============================================================================


class QuestionRepository(ABC):
    """Backing storage for the base and custom question sets."""

    @abstractmethod
    def load_base(self) -> list[Question]:
        """Seed questions (never written)."""

    @abstractmethod
    def load_custom(self) -> list[Question]:
        """Persisted custom questions."""

    @abstractmethod
    def save_custom(self, records: list[Question]) -> None:
        """Replace the whole custom set."""


def _read_json_array(path: Path) -> list[Any]:
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"{path.name} must hold a JSON array")
    return data


class JsonFileQuestionRepository(QuestionRepository):
    """Question files stored as pretty-printed JSON arrays.

    Example:
        >>> repo = JsonFileQuestionRepository(Path("data/baseQuestions.json"),
        ...                                   Path("data/questions.json"))
        >>> len(repo.load_custom())
    """

    def __init__(self, base_path: Path, custom_path: Path):
        """Args:
        base_path: Seed file; missing means no base questions
        custom_path: Custom file; created on first write
        """
        self.base_path = Path(base_path)
        self.custom_path = Path(custom_path)

    def load_base(self) -> list[Question]:
        if not self.base_path.exists():
            logger.warning("Base question file missing", path=str(self.base_path))
            return []

        try:
            raw = _read_json_array(self.base_path)
        except (OSError, ValueError) as e:
            logger.error("Base question file unreadable", path=str(self.base_path), error=str(e))
            return []

        questions = []
        for record in raw:
            try:
                questions.append(Question.model_validate(record))
            except PydanticValidationError as e:
                logger.warning("Skipping malformed base question", error=str(e))
        return questions

    def load_custom(self) -> list[Question]:
        """Raises:
        UpstreamUnavailable: File unreadable, not a JSON array, or holding
            a malformed record
        """
        if not self.custom_path.exists():
            return []

        try:
            raw = _read_json_array(self.custom_path)
            return [Question.model_validate(record) for record in raw]
        except (OSError, ValueError) as e:
            # json.JSONDecodeError and pydantic's ValidationError are ValueErrors
            raise UpstreamUnavailable(
                "Question store unreadable",
                details={"path": str(self.custom_path), "reason": str(e)},
            )

    def save_custom(self, records: list[Question]) -> None:
        """Rewrite the custom file atomically (temp file + rename).

        Raises:
            UpstreamUnavailable: Directory not writable
        """
        payload = json.dumps([q.to_wire() for q in records], indent=2, ensure_ascii=False)
        directory = self.custom_path.parent

        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=directory, prefix=f".{self.custom_path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                    f.write("\n")
                os.replace(tmp_path, self.custom_path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            raise UpstreamUnavailable(
                "Question store not writable",
                details={"path": str(self.custom_path), "reason": str(e)},
            )

        logger.debug("Custom questions saved", count=len(records))


# =============================================================================
# STORE
# =============================================================================


def _check_invariants(question: Question) -> None:
    if len(question.options) != OPTIONS_PER_QUESTION:
        raise ValidationError(
            f"options must contain exactly {OPTIONS_PER_QUESTION} entries",
            details={"count": len(question.options)},
        )
    if not 0 <= question.answer_index < len(question.options):
        raise ValidationError(
            "answerIndex out of range",
            details={"answerIndex": question.answer_index},
        )


def _build_question(record: dict[str, Any]) -> Question:
    try:
        question = Question.model_validate(record)
    except PydanticValidationError as e:
        raise ValidationError(
            "Invalid question",
            details={"errors": [err["msg"] for err in e.errors()]},
        )
    _check_invariants(question)
    return question


class QuestionStore:
    """CRUD over custom questions plus the expanded base set.

    Example:
        >>> store = QuestionStore(repo, per_subject=500)
        >>> store.list(subject="UPSC - History", limit=10, language="hi")
    """

    def __init__(self, repository: QuestionRepository, per_subject: int = 500):
        self.repository = repository
        self.per_subject = per_subject

    def list(
        self,
        subject: Optional[str] = None,
        limit: Optional[int] = None,
        language: str = "en",
    ) -> list[Question]:
        """Expanded base questions followed by custom ones.

        Args:
            subject: Case-insensitive exact subject filter
            limit: Truncate when > 0
            language: ``hi`` substitutes complete Hindi translations; any
                other value lists the English text

        Returns:
            Matching questions; an unreadable custom file only drops the
            custom part (logged)
        """
        questions = expand_per_subject(self.repository.load_base(), self.per_subject)

        try:
            questions.extend(self.repository.load_custom())
        except UpstreamUnavailable as e:
            logger.error("Custom questions unavailable", error=e.message, **e.details)

        if subject:
            wanted = subject.lower()
            questions = [q for q in questions if (q.subject or "").lower() == wanted]

        resolved = Language.resolve(language)
        if resolved is not Language.EN:
            questions = [q.localized(resolved.value) for q in questions]

        if limit is not None and limit > 0:
            questions = questions[:limit]

        return questions

    def get(self, question_id: str) -> Question:
        for q in self.repository.load_custom():
            if q.id == question_id:
                return q
        raise NotFoundError("not found", details={"id": question_id})

    def create(self, payload: dict[str, Any]) -> Question:
        """Validate, assign an id when absent, append and persist.

        Raises:
            ValidationError: Missing required field, bad options/answerIndex,
                or duplicate id
        """
        if any(payload.get(name) in (None, "") for name in REQUIRED_FIELDS):
            raise ValidationError(REQUIRED_MESSAGE)

        record = dict(payload)
        if not record.get("id"):
            record["id"] = f"q{int(time.time() * 1000)}"
        if not record.get("subject"):
            record["subject"] = DEFAULT_SUBJECT

        question = _build_question(record)
        records = self.repository.load_custom()
        if any(q.id == question.id for q in records):
            raise ValidationError("Question id already exists", details={"id": question.id})

        records.append(question)
        self.repository.save_custom(records)
        logger.info("Question created", question_id=question.id, subject=question.subject)
        return question

    def update(self, question_id: str, partial: dict[str, Any]) -> Question:
        """Shallow-merge ``partial`` into the stored record (id is kept).

        Raises:
            NotFoundError: No custom record with ``question_id``
            ValidationError: Merged record breaks an invariant
        """
        records = self.repository.load_custom()
        for i, existing in enumerate(records):
            if existing.id != question_id:
                continue

            merged = existing.to_wire()
            merged.update({k: v for k, v in partial.items() if k != "id"})
            updated = _build_question(merged)
            records[i] = updated
            self.repository.save_custom(records)
            logger.info("Question updated", question_id=question_id)
            return updated

        raise NotFoundError("not found", details={"id": question_id})

    def delete(self, question_id: str) -> bool:
        """Remove the record; an unknown id leaves the file untouched.

        Returns:
            True when a record was removed
        """
        records = self.repository.load_custom()
        remaining = [q for q in records if q.id != question_id]
        if len(remaining) == len(records):
            logger.info("Delete of unknown question ignored", question_id=question_id)
            return False

        self.repository.save_custom(remaining)
        logger.info("Question deleted", question_id=question_id)
        return True
