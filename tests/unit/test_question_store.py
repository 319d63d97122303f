# =============================================================================
# TESTS - Question Store
# =============================================================================
# Listing (expansion, filters, translations) and CRUD on the custom file
# =============================================================================

import json

import pytest


def _read(path):
    return json.loads(path.read_text(encoding="utf-8"))


class TestJsonFileQuestionRepository:
    """Tests for JsonFileQuestionRepository."""

    def test_load_base(self, question_repository):
        questions = question_repository.load_base()

        assert len(questions) == 13
        assert questions[0].id == "hist-1"

    def test_missing_base_is_empty(self, tmp_path):
        from quiz.storage.question_store import JsonFileQuestionRepository

        repo = JsonFileQuestionRepository(tmp_path / "none.json", tmp_path / "custom.json")

        assert repo.load_base() == []
        assert repo.load_custom() == []

    def test_malformed_base_records_skipped(self, tmp_path):
        from quiz.storage.question_store import JsonFileQuestionRepository

        base = tmp_path / "base.json"
        base.write_text(
            json.dumps(
                [
                    {"id": "ok", "question": "Q?", "options": ["a", "b", "c", "d"], "answerIndex": 0},
                    {"id": "broken", "question": "Q?"},
                ]
            ),
            encoding="utf-8",
        )

        questions = JsonFileQuestionRepository(base, tmp_path / "custom.json").load_base()

        assert [q.id for q in questions] == ["ok"]

    def test_corrupt_custom_raises(self, data_dir, question_repository):
        from core.exceptions import UpstreamUnavailable

        (data_dir / "questions.json").write_text("[{", encoding="utf-8")

        with pytest.raises(UpstreamUnavailable):
            question_repository.load_custom()

    def test_save_pretty_printed(self, data_dir, question_repository, make_question):
        question_repository.save_custom([make_question("q1")])

        text = (data_dir / "questions.json").read_text(encoding="utf-8")

        assert text.startswith("[\n  {")
        assert text.endswith("]\n")
        assert '"answerIndex": 0' in text

    def test_save_keeps_unicode(self, data_dir, question_repository, make_question):
        from quiz.models.schemas import QuestionTranslation

        question = make_question(
            "q1", translations={"hi": QuestionTranslation(question="प्रश्न?", options=["क", "ख", "ग", "घ"])}
        )
        question_repository.save_custom([question])

        assert "प्रश्न?" in (data_dir / "questions.json").read_text(encoding="utf-8")

    def test_no_temp_files_left(self, data_dir, question_repository, make_question):
        question_repository.save_custom([make_question("q1")])

        assert sorted(p.name for p in data_dir.iterdir()) == [
            "baseQuestions.json",
            "questions.json",
            "sample_shops.json",
        ]


class TestQuestionStoreList:
    """Tests for QuestionStore.list."""

    def test_expanded_per_subject(self, question_store):
        questions = question_store.list()

        # 6 subjects x 5 records
        assert len(questions) == 30
        assert questions[0].id == "hist-1-auto-1"
        assert questions[0].question == "Who founded the Maurya Empire? (Set 1)"
        assert questions[3].id == "hist-1-auto-4"

    def test_custom_questions_appended(self, question_store, valid_question_payload):
        created = question_store.create(valid_question_payload)

        questions = question_store.list()

        assert len(questions) == 31
        assert questions[-1].id == created.id

    def test_subject_filter_case_insensitive(self, question_store):
        questions = question_store.list(subject="upsc - polity")

        assert len(questions) == 5
        assert {q.subject for q in questions} == {"UPSC - Polity"}

    def test_unknown_subject(self, question_store):
        assert question_store.list(subject="Astrology") == []

    def test_limit(self, question_store):
        assert len(question_store.list(limit=7)) == 7
        assert len(question_store.list(limit=0)) == 30

    def test_hindi_translation(self, question_store):
        questions = question_store.list(subject="UPSC - History", language="hi")

        assert questions[0].question == "मौर्य साम्राज्य की स्थापना किसने की?"
        assert questions[0].options[1] == "चंद्रगुप्त मौर्य"
        # hist-3 has no translation and keeps its English text
        assert questions[2].question == "Who started the Dandi March in 1930? (Set 3)"

    def test_unknown_language_lists_english(self, question_store):
        english = question_store.list(subject="UPSC - History")

        assert question_store.list(subject="UPSC - History", language="fr") == english

    def test_corrupt_custom_file_keeps_base(self, data_dir, question_store):
        (data_dir / "questions.json").write_text("not json", encoding="utf-8")

        assert len(question_store.list()) == 30


class TestQuestionStoreCrud:
    """Tests for create, update and delete."""

    def test_create_assigns_id_and_persists(self, data_dir, question_store, valid_question_payload):
        created = question_store.create(valid_question_payload)

        assert created.id.startswith("q")
        assert created.id[1:].isdigit()
        assert _read(data_dir / "questions.json") == [created.to_wire()]

    def test_create_default_subject(self, question_store, valid_question_payload):
        del valid_question_payload["subject"]

        assert question_store.create(valid_question_payload).subject == "General"

    def test_create_keeps_given_id(self, question_store, valid_question_payload):
        valid_question_payload["id"] = "custom-1"

        assert question_store.create(valid_question_payload).id == "custom-1"

    @pytest.mark.parametrize("missing", ["question", "options", "answerIndex"])
    def test_create_requires_fields(self, question_store, valid_question_payload, missing):
        from core.exceptions import ValidationError

        del valid_question_payload[missing]

        with pytest.raises(ValidationError) as exc_info:
            question_store.create(valid_question_payload)

        assert exc_info.value.message == "question, options, answerIndex required"

    def test_answer_index_zero_accepted(self, question_store, valid_question_payload):
        valid_question_payload["answerIndex"] = 0

        assert question_store.create(valid_question_payload).answer_index == 0

    def test_create_requires_four_options(self, question_store, valid_question_payload):
        from core.exceptions import ValidationError

        valid_question_payload["options"] = ["a", "b", "c"]

        with pytest.raises(ValidationError):
            question_store.create(valid_question_payload)

    @pytest.mark.parametrize("answer_index", [-1, 4])
    def test_create_answer_index_in_range(self, question_store, valid_question_payload, answer_index):
        from core.exceptions import ValidationError

        valid_question_payload["answerIndex"] = answer_index

        with pytest.raises(ValidationError):
            question_store.create(valid_question_payload)

    def test_create_duplicate_id(self, question_store, valid_question_payload):
        from core.exceptions import ValidationError

        valid_question_payload["id"] = "dup"
        question_store.create(valid_question_payload)

        with pytest.raises(ValidationError):
            question_store.create(valid_question_payload)

    def test_create_on_corrupt_file(self, data_dir, question_store, valid_question_payload):
        from core.exceptions import UpstreamUnavailable

        (data_dir / "questions.json").write_text("{}", encoding="utf-8")

        with pytest.raises(UpstreamUnavailable):
            question_store.create(valid_question_payload)

    def test_update_merges(self, question_store, valid_question_payload):
        valid_question_payload["id"] = "q-edit"
        question_store.create(valid_question_payload)

        updated = question_store.update("q-edit", {"id": "other", "answerIndex": 2})

        assert updated.id == "q-edit"
        assert updated.answer_index == 2
        assert updated.question == valid_question_payload["question"]
        assert question_store.get("q-edit").answer_index == 2

    def test_update_unknown(self, question_store):
        from core.exceptions import NotFoundError

        with pytest.raises(NotFoundError) as exc_info:
            question_store.update("missing", {"answerIndex": 1})

        assert exc_info.value.message == "not found"

    def test_update_cannot_break_invariants(self, question_store, valid_question_payload):
        from core.exceptions import ValidationError

        valid_question_payload["id"] = "q-edit"
        question_store.create(valid_question_payload)

        with pytest.raises(ValidationError):
            question_store.update("q-edit", {"answerIndex": 9})

    def test_base_questions_not_editable(self, question_store):
        from core.exceptions import NotFoundError

        with pytest.raises(NotFoundError):
            question_store.update("hist-1", {"answerIndex": 0})

    def test_delete(self, data_dir, question_store, valid_question_payload):
        valid_question_payload["id"] = "q-del"
        question_store.create(valid_question_payload)

        assert question_store.delete("q-del") is True
        assert _read(data_dir / "questions.json") == []

    def test_delete_unknown_leaves_file_untouched(self, data_dir, question_store, valid_question_payload):
        question_store.create(valid_question_payload)
        before = (data_dir / "questions.json").read_bytes()

        assert question_store.delete("missing") is False
        assert (data_dir / "questions.json").read_bytes() == before
