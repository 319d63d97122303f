"""Core module - config-independent building blocks shared by every feature.

- exceptions: AppError taxonomy rendered by the HTTP layer
- logger: structlog setup
- rate_limiter: slowapi limiter
- auth: token verification and password hashing
- users: user account store (document database)
"""

from .exceptions import (
    AppError,
    AuthError,
    ConfigurationError,
    NotFoundError,
    UpstreamUnavailable,
    ValidationError,
)
from .logger import configure_logging, get_logger

__all__ = [
    "AppError",
    "AuthError",
    "ConfigurationError",
    "NotFoundError",
    "UpstreamUnavailable",
    "ValidationError",
    "configure_logging",
    "get_logger",
]
