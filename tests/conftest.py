# =============================================================================
# CONFTEST - Shared fixtures for every test
# =============================================================================
# Centralizes mocks, sample data and the per-test application state
# =============================================================================

import json
import os
import shutil
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
BUNDLED_DATA = PROJECT_ROOT / "data"

TEST_JWT_SECRET = "test-secret-0123456789abcdef0123456789"


# =============================================================================
# ENVIRONMENT FIXTURES
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Test environment for the whole session."""
    env_vars = {
        "ENVIRONMENT": "test",
        "LOG_LEVEL": "ERROR",  # Keep test output quiet
        "RATE_LIMIT_ENABLED": "false",
        "MONGODB_URI": "",
        "MONGODB_URI_db1": "",
        "JWT_SECRET": TEST_JWT_SECRET,
    }
    with patch.dict(os.environ, env_vars):
        yield


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Copy of the bundled data files in a temp directory."""
    target = tmp_path / "data"
    target.mkdir()
    for name in ("baseQuestions.json", "questions.json", "sample_shops.json"):
        shutil.copy(BUNDLED_DATA / name, target / name)
    return target


@pytest.fixture(autouse=True)
def isolated_app_state(monkeypatch, data_dir: Path):
    """Fresh config and stores per test, reading from ``data_dir``."""
    import app_state
    from config import reset_config

    monkeypatch.setenv("DATA_DIR", str(data_dir))
    monkeypatch.setenv("QUESTIONS_PER_SUBJECT", "5")
    reset_config()
    app_state.reset()
    yield
    app_state.reset()
    reset_config()


# =============================================================================
# FASTAPI FIXTURES
# =============================================================================


@pytest.fixture
def client():
    """FastAPI test client."""
    from fastapi.testclient import TestClient
    from server import app

    return TestClient(app)


@pytest.fixture
def async_client():
    """Async client for async tests."""
    from httpx import ASGITransport, AsyncClient
    from server import app

    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


# =============================================================================
# DIRECTORY FIXTURES
# =============================================================================


@pytest.fixture
def sample_shops(data_dir: Path) -> list[dict[str, Any]]:
    """Raw sample shop documents."""
    with open(data_dir / "sample_shops.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def sample_store(sample_shops):
    """In-process shop store over the sample documents."""
    from directory.storage.shop_store import SampleShopStore

    return SampleShopStore(sample_shops)


@pytest.fixture
def mock_shop_collection():
    """Mock of an async pymongo collection for shop queries."""
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=[])

    collection = MagicMock()
    collection.aggregate = AsyncMock(return_value=cursor)
    collection.distinct = AsyncMock(return_value=[])
    collection.cursor = cursor
    return collection


@pytest.fixture
def connaught_place() -> tuple[float, float]:
    """Default map centre (New Delhi)."""
    return 28.6139, 77.209


# =============================================================================
# USER FIXTURES
# =============================================================================


@pytest.fixture
def mock_users_collection():
    """Mock of an async pymongo collection for user documents."""
    from bson import ObjectId

    collection = MagicMock()
    collection.find_one = AsyncMock(return_value=None)
    collection.count_documents = AsyncMock(return_value=0)
    collection.insert_one = AsyncMock(return_value=MagicMock(inserted_id=ObjectId()))
    return collection


@pytest.fixture
def user_document() -> dict[str, Any]:
    """Active user as stored (password already projected out)."""
    from bson import ObjectId

    return {
        "_id": ObjectId("665f1b2c3d4e5f6a7b8c9d0e"),
        "name": "Asha Verma",
        "email": "asha@example.com",
        "phone": "9876543210",
        "role": "agent",
        "agentCode": "AG0007",
        "isActive": True,
        "isEmailVerified": True,
    }


@pytest.fixture
def make_token():
    """Factory for signed tokens carrying ``userId``."""
    import jwt

    def _make(user_id: Any = "665f1b2c3d4e5f6a7b8c9d0e", secret: str = TEST_JWT_SECRET, **claims):
        payload = {"userId": user_id, **claims}
        return jwt.encode(payload, secret, algorithm="HS256")

    return _make


# =============================================================================
# QUIZ FIXTURES
# =============================================================================


@pytest.fixture
def make_question():
    """Factory for questions with four options."""
    from quiz.models.schemas import Question

    def _make(question_id: str = "q1", answer_index: int = 0, subject: str = "General", **extra):
        return Question(
            id=question_id,
            question=f"Question {question_id}?",
            options=["Option A", "Option B", "Option C", "Option D"],
            answer_index=answer_index,
            subject=subject,
            **extra,
        )

    return _make


@pytest.fixture
def quiz_questions(make_question):
    """Three questions; correct answers are B, A and D."""
    return (
        make_question("q1", answer_index=1),
        make_question("q2", answer_index=0),
        make_question("q3", answer_index=3),
    )


@pytest.fixture
def quiz_settings():
    """Three questions, three-second countdown, one skip."""
    from quiz.models.state import QuizSettings

    return QuizSettings(subject=None, question_count=3, time_per_question=3, skip_budget=1)


@pytest.fixture
def question_repository(data_dir: Path):
    from quiz.storage.question_store import JsonFileQuestionRepository

    return JsonFileQuestionRepository(
        data_dir / "baseQuestions.json", data_dir / "questions.json"
    )


@pytest.fixture
def question_store(question_repository):
    """Question store expanding each subject to five records."""
    from quiz.storage.question_store import QuestionStore

    return QuestionStore(question_repository, per_subject=5)


@pytest.fixture
def valid_question_payload() -> dict[str, Any]:
    """Create-question body as the admin page sends it."""
    return {
        "question": "What is the capital of India?",
        "options": ["Mumbai", "New Delhi", "Kolkata", "Chennai"],
        "answerIndex": 1,
        "subject": "General Knowledge",
    }
