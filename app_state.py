"""Shared application state: config, database client and lazily built stores."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from config import AppConfig, get_config
from core.exceptions import ConfigurationError, UpstreamUnavailable
from core.logger import get_logger
from core.users import UserStore
from directory.engine.categories import CategoryCatalog
from directory.engine.proximity import ProximityPolicy, ProximityRanker
from directory.storage.shop_store import MongoShopStore, SampleShopStore, ShopStore
from quiz.storage.question_store import JsonFileQuestionRepository, QuestionStore
from quiz.storage.session_store import QuizSessionStore

if TYPE_CHECKING:
    from pymongo import AsyncMongoClient

logger = get_logger("app_state")

# =============================================================================
# GLOBAL INSTANCES
# =============================================================================

mongo_client: Optional[AsyncMongoClient] = None
shop_store: Optional[ShopStore] = None
user_store: Optional[UserStore] = None
question_store: Optional[QuestionStore] = None
session_store: Optional[QuizSessionStore] = None


def get_app_config() -> AppConfig:
    return get_config()


def get_mongo_client() -> Optional[AsyncMongoClient]:
    """Client for the configured URI, or None when no database is configured."""
    global mongo_client
    config = get_config()
    if not config.database_configured:
        return None
    if mongo_client is None:
        from pymongo import AsyncMongoClient

        # Connects lazily on the first operation
        mongo_client = AsyncMongoClient(config.mongodb_uri)
        logger.info("MongoDB client created", db_name=config.db_name)
    return mongo_client


def _collection(name: str):
    client = get_mongo_client()
    if client is None:
        return None
    return client[get_config().db_name][name]


# =============================================================================
# DIRECTORY
# =============================================================================


def get_shop_store() -> ShopStore:
    """Mongo-backed store, or bundled sample shops without a database."""
    global shop_store
    if shop_store is None:
        config = get_config()
        collection = _collection(config.shops_collection)
        if collection is not None:
            shop_store = MongoShopStore(collection)
        else:
            logger.warning("MongoDB not configured, serving sample shops")
            try:
                shop_store = SampleShopStore.from_file(config.sample_shops_path)
            except UpstreamUnavailable as e:
                logger.error("Sample shops unavailable", error=e.message, **e.details)
                shop_store = SampleShopStore([])
    return shop_store


def get_ranker() -> ProximityRanker:
    return ProximityRanker(get_shop_store(), ProximityPolicy.from_config(get_config()))


def get_category_catalog() -> CategoryCatalog:
    """Categories come only from the database; otherwise the static list."""
    config = get_config()
    store = get_shop_store() if config.database_configured else None
    return CategoryCatalog(store, require_paid=config.nearby_require_paid)


# =============================================================================
# USERS
# =============================================================================


def get_user_store() -> UserStore:
    """Raises:
    ConfigurationError: No database configured
    """
    global user_store
    if user_store is None:
        collection = _collection(get_config().users_collection)
        if collection is None:
            raise ConfigurationError("MongoDB not configured")
        user_store = UserStore(collection)
    return user_store


# =============================================================================
# QUIZ
# =============================================================================


def get_question_store() -> QuestionStore:
    global question_store
    if question_store is None:
        config = get_config()
        repository = JsonFileQuestionRepository(
            config.base_questions_path, config.custom_questions_path
        )
        question_store = QuestionStore(repository, per_subject=config.questions_per_subject)
    return question_store


def get_session_store() -> QuizSessionStore:
    global session_store
    if session_store is None:
        config = get_app_config()
        session_store = QuizSessionStore(
            max_sessions=config.quiz_max_sessions,
            ttl_seconds=config.quiz_session_ttl_seconds,
        )
    return session_store


# =============================================================================
# LIFECYCLE
# =============================================================================


def reset() -> None:
    """Drop every cached instance (tests, config reload)."""
    global mongo_client, shop_store, user_store, question_store, session_store
    mongo_client = None
    shop_store = None
    user_store = None
    question_store = None
    session_store = None


async def cleanup() -> None:
    """Close the database client on shutdown."""
    global mongo_client
    if mongo_client is not None:
        await mongo_client.close()
        logger.info("MongoDB client closed")
    reset()
