"""Proximity ranking of shops around a coordinate.

The ranked query keeps shops within ``max_distance_km`` of the point, sorted
nearest first and capped by the rail limit. When nothing is in range and the
fallback is enabled, the same eligibility (minus the coordinate requirement)
is served by payment recency with ``distance: null``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

from core.logger import get_logger
from utils.validators import parse_coordinate

from ..models.enums import RailPolicy, policy_for_rail
from ..models.schemas import DEFAULT_RATING, NearbyShop
from .filters import eligibility_filter
from .geo import distance_expression

if TYPE_CHECKING:
    from config import AppConfig

    from ..storage.shop_store import ShopStore

logger = get_logger("proximity")

COORDINATES_REQUIRED = "lat and lng parameters are required"


@dataclass(frozen=True)
class ProximityQuery:
    """A validated ranking request."""

    lat: float
    lng: float
    rail: Optional[str] = None

    @classmethod
    def parse(cls, lat: Any, lng: Any, rail: Optional[str] = None) -> "ProximityQuery":
        """Build a query from raw request values.

        Raises:
            ValidationError: lat or lng missing, non-numeric or zero
        """
        return cls(
            lat=parse_coordinate(lat, COORDINATES_REQUIRED),
            lng=parse_coordinate(lng, COORDINATES_REQUIRED),
            rail=rail.strip().lower() if rail and rail.strip() else None,
        )

    @property
    def rail_policy(self) -> RailPolicy:
        return policy_for_rail(self.rail)


@dataclass(frozen=True)
class ProximityPolicy:
    """Deployment knobs for the ranking query."""

    max_distance_km: float = 50.0
    fallback_enabled: bool = True
    require_paid: bool = False

    @classmethod
    def from_config(cls, config: "AppConfig") -> "ProximityPolicy":
        return cls(
            max_distance_km=config.nearby_max_distance_km,
            fallback_enabled=config.nearby_fallback_enabled,
            require_paid=config.nearby_require_paid,
        )


# =============================================================================
# PIPELINES
# =============================================================================


def _project_stage(with_distance: bool) -> dict[str, Any]:
    return {
        "$project": {
            "_id": 0,
            "id": {"$toString": "$_id"},
            "name": "$shopName",
            "category": 1,
            "rating": {"$ifNull": ["$rating", DEFAULT_RATING]},
            "distance": {"$round": ["$distance", 2]} if with_distance else {"$literal": None},
            "photoUrl": 1,
            "shopUrl": 1,
            "planType": 1,
            "owner": "$ownerName",
            "city": 1,
            "pincode": 1,
            "views": {"$ifNull": ["$visitorCount", 0]},
        }
    }


def build_nearby_pipeline(query: ProximityQuery, policy: ProximityPolicy) -> list[dict[str, Any]]:
    """Aggregation pipeline for the distance-ranked query."""
    rail_policy = query.rail_policy
    return [
        {"$match": eligibility_filter(rail_policy, policy.require_paid)},
        {"$addFields": {"distance": distance_expression(query.lat, query.lng)}},
        {"$match": {"distance": {"$lte": policy.max_distance_km}}},
        {"$sort": {"distance": 1}},
        {"$limit": rail_policy.limit},
        _project_stage(with_distance=True),
    ]


def build_fallback_pipeline(query: ProximityQuery, policy: ProximityPolicy) -> list[dict[str, Any]]:
    """Aggregation pipeline for the no-results fallback (recency order)."""
    rail_policy = query.rail_policy
    return [
        {
            "$match": eligibility_filter(
                rail_policy, policy.require_paid, require_coordinates=False
            )
        },
        {"$sort": {"lastPaymentDate": -1, "_id": -1}},
        {"$limit": rail_policy.limit},
        _project_stage(with_distance=False),
    ]


# =============================================================================
# RANKER
# =============================================================================


class ProximityRanker:
    """Runs the ranked query, then the fallback when it comes back empty.

    Example:
        >>> ranker = ProximityRanker(store, ProximityPolicy())
        >>> shops = await ranker.rank(ProximityQuery.parse("28.61", "77.2", "hero"))
    """

    def __init__(self, store: "ShopStore", policy: ProximityPolicy):
        self.store = store
        self.policy = policy

    async def rank(self, query: ProximityQuery) -> list[NearbyShop]:
        """Return ranked shops for ``query``.

        Raises:
            UpstreamUnavailable: Store failure (callers on read paths swallow it)
        """
        rows = await self.store.nearby(query, self.policy)
        if not rows and self.policy.fallback_enabled:
            rows = await self.store.fallback(query, self.policy)
            logger.info("Nearby fallback used", rail=query.rail, count=len(rows))

        shops = [NearbyShop.model_validate(row) for row in rows]
        logger.debug("Nearby shops ranked", rail=query.rail, count=len(shops))
        return shops
