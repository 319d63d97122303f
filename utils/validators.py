"""Input validators for raw query-string values."""

import math
from typing import Any, Optional

from core.exceptions import ValidationError


def parse_coordinate(raw: Any, message: str) -> float:
    """Parse a latitude/longitude query value.

    Missing, non-numeric, non-finite and zero values are rejected, zero
    being what an unset client coordinate serializes to.

    Raises:
        ValidationError: with ``message``
    """
    if raw is None or raw == "":
        raise ValidationError(message)
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise ValidationError(message)
    if not math.isfinite(value) or value == 0:
        raise ValidationError(message)
    return value


def parse_int(raw: Any) -> Optional[int]:
    """Lenient integer parse; anything unparsable counts as absent."""
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def bounded_limit(raw: Any, default: int, minimum: int = 1, maximum: int = 100) -> int:
    """Parse ``raw`` and clamp it to ``[minimum, maximum]`` (``default`` when absent)."""
    value = parse_int(raw)
    if value is None:
        value = default
    return max(minimum, min(maximum, value))
