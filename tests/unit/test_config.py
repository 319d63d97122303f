# =============================================================================
# TESTS - Config Module
# =============================================================================
# Unit tests for the environment-driven configuration
# =============================================================================

import os
from pathlib import Path
from unittest.mock import patch


class TestAppConfigDefaults:
    """Tests for AppConfig default values."""

    def test_defaults(self):
        from config import AppConfig

        config = AppConfig()

        assert config.db_name == "99-rupeess"
        assert config.shops_collection == "agentshops"
        assert config.nearby_max_distance_km == 50.0
        assert config.nearby_fallback_enabled is True
        assert config.nearby_require_paid is False
        assert config.questions_per_subject == 500
        assert config.quiz_timeout_consumes_skip is False
        assert config.quiz_max_sessions == 1000
        assert config.quiz_session_ttl_seconds == 3600
        assert config.database_configured is False

    def test_data_paths(self, tmp_path):
        from config import AppConfig

        config = AppConfig(data_dir=tmp_path)

        assert config.base_questions_path == tmp_path / "baseQuestions.json"
        assert config.custom_questions_path == tmp_path / "questions.json"
        assert config.sample_shops_path == tmp_path / "sample_shops.json"

    def test_is_production(self):
        from config import AppConfig

        assert AppConfig(environment="production").is_production
        assert AppConfig(environment="PROD").is_production
        assert not AppConfig(environment="development").is_production


class TestAppConfigFromEnv:
    """Tests for AppConfig.from_env."""

    def test_db1_uri_wins(self):
        from config import AppConfig

        env = {"MONGODB_URI_db1": "mongodb://primary", "MONGODB_URI": "mongodb://secondary"}
        with patch.dict(os.environ, env):
            config = AppConfig.from_env()

        assert config.mongodb_uri == "mongodb://primary"
        assert config.database_configured

    def test_fallback_uri(self):
        from config import AppConfig

        env = {"MONGODB_URI_db1": "", "MONGODB_URI": "mongodb://secondary"}
        with patch.dict(os.environ, env):
            assert AppConfig.from_env().mongodb_uri == "mongodb://secondary"

    def test_booleans_and_numbers(self):
        from config import AppConfig

        env = {
            "NEARBY_REQUIRE_PAID": "true",
            "NEARBY_FALLBACK_ENABLED": "0",
            "NEARBY_MAX_DISTANCE_KM": "12.5",
            "QUIZ_SKIP_BUDGET": "5",
            "QUIZ_TIMEOUT_CONSUMES_SKIP": "yes",
            "QUIZ_MAX_SESSIONS": "25",
        }
        with patch.dict(os.environ, env):
            config = AppConfig.from_env()

        assert config.nearby_require_paid is True
        assert config.nearby_fallback_enabled is False
        assert config.nearby_max_distance_km == 12.5
        assert config.quiz_skip_budget == 5
        assert config.quiz_timeout_consumes_skip is True
        assert config.quiz_max_sessions == 25

    def test_invalid_numbers_use_defaults(self):
        from config import AppConfig

        env = {"NEARBY_MAX_DISTANCE_KM": "far", "QUESTIONS_PER_SUBJECT": "many"}
        with patch.dict(os.environ, env):
            config = AppConfig.from_env()

        assert config.nearby_max_distance_km == 50.0
        assert config.questions_per_subject == 500

    def test_cors_origins_list(self):
        from config import AppConfig

        with patch.dict(os.environ, {"CORS_ORIGINS": "https://a.example, https://b.example,"}):
            config = AppConfig.from_env()

        assert config.cors_origins == ["https://a.example", "https://b.example"]

    def test_data_dir(self, tmp_path):
        from config import AppConfig

        with patch.dict(os.environ, {"DATA_DIR": str(tmp_path)}):
            assert AppConfig.from_env().data_dir == Path(tmp_path)


class TestConfigSingleton:
    """Tests for get_config/reset_config."""

    def test_cached_until_reset(self):
        from config import get_config, reset_config

        first = get_config()

        assert get_config() is first
        reset_config()
        assert get_config() is not first


class TestToDict:
    """Tests for the /health view."""

    def test_sections(self):
        from config import AppConfig

        data = AppConfig().to_dict()

        assert set(data) == {"database", "questions", "nearby", "quiz", "http", "environment"}
        assert data["nearby"]["max_distance_km"] == 50.0

    def test_no_secrets(self):
        from config import AppConfig

        text = repr(AppConfig(mongodb_uri="mongodb://user:pw@host", jwt_secret="s3cret").to_dict())

        assert "pw@host" not in text
        assert "s3cret" not in text
