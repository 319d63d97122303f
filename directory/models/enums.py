"""Directory Enums - Plan types, rails and rail policies."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class PlanType(str, Enum):
    """Paid promotion tier of a shop."""

    HERO = "HERO"
    PREMIUM = "PREMIUM"
    FEATURED = "FEATURED"
    BASIC = "BASIC"
    LEFT_BAR = "LEFT_BAR"
    RIGHT_SIDE = "RIGHT_SIDE"


class Rail(str, Enum):
    """Named placement slot on the home page."""

    HERO = "hero"
    LEFT = "left"
    RIGHT = "right"


PAID_STATUS = "PAID"


@dataclass(frozen=True)
class RailPolicy:
    """Eligibility and count limit for one rail.

    Attributes:
        limit: Maximum number of shops returned
        plan_types: Accepted plan types; empty means no plan filter
        include_untagged: Shops without planType (missing or null) stay eligible
    """

    limit: int
    plan_types: tuple[PlanType, ...] = ()
    include_untagged: bool = True

    @property
    def filters_plan(self) -> bool:
        return bool(self.plan_types)


GENERAL_POLICY = RailPolicy(limit=100)

# Rails with a name we do not know still get the named-rail limit
UNKNOWN_RAIL_POLICY = RailPolicy(limit=2)

RAIL_POLICIES: dict[Rail, RailPolicy] = {
    Rail.HERO: RailPolicy(
        limit=5,
        plan_types=(PlanType.HERO, PlanType.PREMIUM, PlanType.FEATURED, PlanType.BASIC),
        include_untagged=False,
    ),
    Rail.LEFT: RailPolicy(
        limit=2,
        plan_types=(PlanType.LEFT_BAR, PlanType.PREMIUM, PlanType.FEATURED),
    ),
    Rail.RIGHT: RailPolicy(
        limit=2,
        plan_types=(PlanType.RIGHT_SIDE, PlanType.PREMIUM, PlanType.FEATURED),
    ),
}


def policy_for_rail(rail: Optional[str]) -> RailPolicy:
    """Resolve a raw ``rail`` query value to its policy."""
    if not rail:
        return GENERAL_POLICY
    try:
        return RAIL_POLICIES[Rail(rail.lower())]
    except ValueError:
        return UNKNOWN_RAIL_POLICY
