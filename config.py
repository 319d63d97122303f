# =============================================================================
# CONFIGURATION - Local Directory API
# =============================================================================
# Built once at startup from the environment (.env honoured) and passed
# explicitly to stores and engines. Request handlers never read os.environ.
# =============================================================================

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:8000",
    "http://127.0.0.1:8000",
]


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    try:
        return float(raw) if raw else default
    except ValueError:
        return default


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


# -----------------------------------------------------------------------------
# Config dataclass
# -----------------------------------------------------------------------------


@dataclass
class AppConfig:
    """Runtime configuration for the whole application."""

    # Document database
    mongodb_uri: str = ""
    db_name: str = "99-rupeess"
    shops_collection: str = "agentshops"
    users_collection: str = "users"

    # Flat-file data (question store, sample shops)
    data_dir: Path = field(default_factory=lambda: Path.cwd() / "data")
    questions_per_subject: int = 500

    # Proximity ranking policy
    nearby_max_distance_km: float = 50.0
    nearby_fallback_enabled: bool = True
    nearby_require_paid: bool = False
    default_lat: float = 28.6139
    default_lng: float = 77.209

    # Quiz defaults
    quiz_time_per_question: int = 30
    quiz_skip_budget: int = 3
    quiz_timeout_consumes_skip: bool = False
    quiz_max_sessions: int = 1000
    quiz_session_ttl_seconds: int = 3600

    # Auth
    jwt_secret: str = "dev-secret-change-me"
    jwt_algorithm: str = "HS256"

    # HTTP
    cors_origins: list[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    rate_limit_enabled: bool = True
    signup_rate_limit: str = "10/minute"

    environment: str = "development"
    log_level: str = "INFO"

    @property
    def database_configured(self) -> bool:
        return bool(self.mongodb_uri)

    @property
    def base_questions_path(self) -> Path:
        return self.data_dir / "baseQuestions.json"

    @property
    def custom_questions_path(self) -> Path:
        return self.data_dir / "questions.json"

    @property
    def sample_shops_path(self) -> Path:
        return self.data_dir / "sample_shops.json"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in ("production", "prod")

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Build config from environment variables.

        ``MONGODB_URI_db1`` wins over ``MONGODB_URI``; an empty value means the
        database is not configured and read paths degrade to sample data.
        """
        data_dir = os.getenv("DATA_DIR")
        return cls(
            mongodb_uri=(os.getenv("MONGODB_URI_db1") or os.getenv("MONGODB_URI") or "").strip(),
            db_name=os.getenv("DB_NAME", "99-rupeess"),
            shops_collection=os.getenv("SHOPS_COLLECTION", "agentshops"),
            users_collection=os.getenv("USERS_COLLECTION", "users"),
            data_dir=Path(data_dir) if data_dir else Path.cwd() / "data",
            questions_per_subject=_env_int("QUESTIONS_PER_SUBJECT", 500),
            nearby_max_distance_km=_env_float("NEARBY_MAX_DISTANCE_KM", 50.0),
            nearby_fallback_enabled=_env_bool("NEARBY_FALLBACK_ENABLED", True),
            nearby_require_paid=_env_bool("NEARBY_REQUIRE_PAID", False),
            default_lat=_env_float("DEFAULT_LAT", 28.6139),
            default_lng=_env_float("DEFAULT_LNG", 77.209),
            quiz_time_per_question=_env_int("QUIZ_TIME_PER_QUESTION", 30),
            quiz_skip_budget=_env_int("QUIZ_SKIP_BUDGET", 3),
            quiz_timeout_consumes_skip=_env_bool("QUIZ_TIMEOUT_CONSUMES_SKIP", False),
            quiz_max_sessions=_env_int("QUIZ_MAX_SESSIONS", 1000),
            quiz_session_ttl_seconds=_env_int("QUIZ_SESSION_TTL_SECONDS", 3600),
            jwt_secret=os.getenv("JWT_SECRET", "dev-secret-change-me"),
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            cors_origins=_env_list("CORS_ORIGINS", DEFAULT_CORS_ORIGINS),
            rate_limit_enabled=_env_bool("RATE_LIMIT_ENABLED", True),
            signup_rate_limit=os.getenv("SIGNUP_RATE_LIMIT", "10/minute"),
            environment=os.getenv("ENVIRONMENT", "development"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Sectioned, secret-free view of the config (served by /health)."""
        return {
            "database": {
                "configured": self.database_configured,
                "db_name": self.db_name,
                "shops_collection": self.shops_collection,
                "users_collection": self.users_collection,
            },
            "questions": {
                "data_dir": str(self.data_dir),
                "per_subject": self.questions_per_subject,
            },
            "nearby": {
                "max_distance_km": self.nearby_max_distance_km,
                "fallback_enabled": self.nearby_fallback_enabled,
                "require_paid": self.nearby_require_paid,
                "default_location": {"lat": self.default_lat, "lng": self.default_lng},
            },
            "quiz": {
                "time_per_question": self.quiz_time_per_question,
                "skip_budget": self.quiz_skip_budget,
                "timeout_consumes_skip": self.quiz_timeout_consumes_skip,
                "max_sessions": self.quiz_max_sessions,
                "session_ttl_seconds": self.quiz_session_ttl_seconds,
            },
            "http": {
                "cors_origins": self.cors_origins,
                "rate_limit_enabled": self.rate_limit_enabled,
            },
            "environment": self.environment,
        }


# -----------------------------------------------------------------------------
# Singleton
# -----------------------------------------------------------------------------

_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Return the process-wide config, loading ``.env`` on first use."""
    global _config
    if _config is None:
        load_dotenv()
        _config = AppConfig.from_env()
    return _config


def reset_config() -> None:
    """Forget the cached config (used by tests)."""
    global _config
    _config = None
