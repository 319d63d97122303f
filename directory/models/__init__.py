"""Directory Models - Enums and Schemas."""

from .enums import (
    GENERAL_POLICY,
    PAID_STATUS,
    RAIL_POLICIES,
    UNKNOWN_RAIL_POLICY,
    PlanType,
    Rail,
    RailPolicy,
    policy_for_rail,
)
from .schemas import HomeFeed, NearbyShop, SearchShop, ShopCard

__all__ = [
    # Enums
    "PlanType",
    "Rail",
    "RailPolicy",
    "RAIL_POLICIES",
    "GENERAL_POLICY",
    "UNKNOWN_RAIL_POLICY",
    "PAID_STATUS",
    "policy_for_rail",
    # Schemas
    "ShopCard",
    "NearbyShop",
    "SearchShop",
    "HomeFeed",
]
