"""Application exceptions.

Every error carries a human readable ``message`` and optional ``details``.
``status_code`` is used by the HTTP layer when the error surfaces to the
client; read-serving endpoints catch these and degrade instead.
"""

from typing import Any, Optional


class AppError(Exception):
    """Base class for all application errors."""

    status_code: int = 500

    def __init__(self, message: str = "", details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(AppError):
    """Missing or malformed input."""

    status_code = 400


class NotFoundError(AppError):
    """Lookup by an unknown identifier."""

    status_code = 404


class AuthError(AppError):
    """Missing, malformed or rejected credentials."""

    status_code = 401


class UpstreamUnavailable(AppError):
    """Database or flat store could not be reached or read."""

    status_code = 503


class ConfigurationError(AppError):
    """Operation requires a backend that is not configured."""

    status_code = 500
