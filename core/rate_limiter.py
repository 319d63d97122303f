"""Rate limiting (slowapi)."""

from typing import Optional

from slowapi import Limiter
from slowapi.util import get_remote_address

from config import get_config

# Per-endpoint limits; "signup" is overridden from config on first use
RATE_LIMITS: dict[str, str] = {
    "signup": "10/minute",
}

_limiter: Optional[Limiter] = None


def get_limiter() -> Limiter:
    """Return the process-wide limiter keyed by client address."""
    global _limiter
    if _limiter is None:
        config = get_config()
        RATE_LIMITS["signup"] = config.signup_rate_limit
        _limiter = Limiter(
            key_func=get_remote_address,
            enabled=config.rate_limit_enabled,
        )
    return _limiter
