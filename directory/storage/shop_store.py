"""Shop Store - Read-only access to shop documents.

Two backends implement the same queries:

- MongoShopStore: aggregation pipelines on the ``agentshops`` collection
- SampleShopStore: bundled sample documents evaluated in-process, used when
  no database is configured so read paths still have data to show
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from pymongo.errors import PyMongoError

from core.exceptions import UpstreamUnavailable
from core.logger import get_logger

from ..engine.filters import is_eligible, is_paid, paid_filter
from ..engine.geo import great_circle_km
from ..engine.proximity import (
    ProximityPolicy,
    ProximityQuery,
    build_fallback_pipeline,
    build_nearby_pipeline,
)
from ..engine.search import ShopSearch, build_search_pipeline
from ..models.schemas import DEFAULT_RATING

logger = get_logger("shop_store")


class ShopStore(ABC):
    """Query interface shared by the shop backends."""

    @abstractmethod
    async def nearby(self, query: ProximityQuery, policy: ProximityPolicy) -> list[dict[str, Any]]:
        """Distance-ranked shop summaries."""

    @abstractmethod
    async def fallback(self, query: ProximityQuery, policy: ProximityPolicy) -> list[dict[str, Any]]:
        """Recency-ordered summaries with ``distance: None``."""

    @abstractmethod
    async def search(self, search: ShopSearch, require_paid: bool) -> list[dict[str, Any]]:
        """Filtered search results."""

    @abstractmethod
    async def categories(self, require_paid: bool) -> list[str]:
        """Distinct non-empty categories (unsorted)."""


# =============================================================================
# MONGO
# =============================================================================


class MongoShopStore(ShopStore):
    """Shop queries on an async pymongo collection."""

    def __init__(self, collection):
        self.collection = collection

    async def aggregate(self, pipeline: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Run ``pipeline`` and collect every document.

        Raises:
            UpstreamUnavailable: Any driver error
        """
        try:
            cursor = await self.collection.aggregate(pipeline)
            return await cursor.to_list()
        except PyMongoError as e:
            raise UpstreamUnavailable("Shop query failed", details={"reason": str(e)})

    async def nearby(self, query, policy):
        return await self.aggregate(build_nearby_pipeline(query, policy))

    async def fallback(self, query, policy):
        return await self.aggregate(build_fallback_pipeline(query, policy))

    async def search(self, search, require_paid):
        return await self.aggregate(build_search_pipeline(search, require_paid))

    async def categories(self, require_paid):
        query = {
            "$and": [
                paid_filter(require_paid),
                {"category": {"$exists": True, "$nin": [None, ""]}},
            ]
        }
        try:
            return await self.collection.distinct("category", query)
        except PyMongoError as e:
            raise UpstreamUnavailable("Category query failed", details={"reason": str(e)})


# =============================================================================
# SAMPLE DATA
# =============================================================================


def _summary(shop: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": str(shop.get("_id", "")),
        "name": shop.get("shopName"),
        "category": shop.get("category"),
        "rating": shop.get("rating") if shop.get("rating") is not None else DEFAULT_RATING,
        "photoUrl": shop.get("photoUrl"),
        "shopUrl": shop.get("shopUrl"),
        "planType": shop.get("planType"),
        "pincode": shop.get("pincode"),
    }


def _nearby_summary(shop: dict[str, Any], distance: Any) -> dict[str, Any]:
    summary = _summary(shop)
    summary.update(
        {
            "distance": round(distance, 2) if distance is not None else None,
            "owner": shop.get("ownerName"),
            "city": shop.get("city"),
            "views": shop.get("visitorCount") or 0,
        }
    )
    return summary


def _search_summary(shop: dict[str, Any]) -> dict[str, Any]:
    summary = _summary(shop)
    summary.update(
        {
            "address": shop.get("address"),
            "mobile": shop.get("mobile"),
            "visitorCount": shop.get("visitorCount") or 0,
        }
    )
    return summary


def _by_recency(shops: list[dict[str, Any]], tie_break_on_id: bool = True) -> list[dict[str, Any]]:
    """Latest ``lastPaymentDate`` first; shops without one sort last."""
    return sorted(
        shops,
        key=lambda s: (
            s.get("lastPaymentDate") or "",
            str(s.get("_id", "")) if tie_break_on_id else "",
        ),
        reverse=True,
    )


class SampleShopStore(ShopStore):
    """In-process store over a list of raw shop documents.

    Example:
        >>> store = SampleShopStore.from_file(Path("data/sample_shops.json"))
        >>> rows = await store.nearby(ProximityQuery.parse(28.61, 77.2), ProximityPolicy())
    """

    def __init__(self, records: list[dict[str, Any]]):
        self.records = records

    @classmethod
    def from_file(cls, path: Path) -> "SampleShopStore":
        """Load documents from a JSON array; a missing file gives an empty store.

        Raises:
            UpstreamUnavailable: File unreadable or not valid JSON
        """
        if not path.exists():
            logger.warning("Sample shops file missing", path=str(path))
            return cls([])

        try:
            with open(path, encoding="utf-8") as f:
                records = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise UpstreamUnavailable("Sample shops unreadable", details={"reason": str(e)})

        if not isinstance(records, list):
            raise UpstreamUnavailable("Sample shops file must hold a JSON array")

        logger.info("Sample shops loaded", path=str(path), count=len(records))
        return cls(records)

    async def nearby(self, query, policy):
        rail_policy = query.rail_policy
        ranked = []
        for shop in self.records:
            if not is_eligible(shop, rail_policy, policy.require_paid):
                continue
            distance = great_circle_km(query.lat, query.lng, shop["latitude"], shop["longitude"])
            if distance <= policy.max_distance_km:
                ranked.append((distance, shop))

        ranked.sort(key=lambda pair: pair[0])
        return [_nearby_summary(shop, d) for d, shop in ranked[: rail_policy.limit]]

    async def fallback(self, query, policy):
        rail_policy = query.rail_policy
        eligible = [
            shop
            for shop in self.records
            if is_eligible(shop, rail_policy, policy.require_paid, require_coordinates=False)
        ]
        return [_nearby_summary(shop, None) for shop in _by_recency(eligible)[: rail_policy.limit]]

    async def search(self, search, require_paid):
        matched = [
            shop
            for shop in self.records
            if is_paid(shop, require_paid) and search.matches(shop)
        ]
        return [_search_summary(shop) for shop in _by_recency(matched, False)[: search.limit]]

    async def categories(self, require_paid):
        return list(
            {
                shop["category"]
                for shop in self.records
                if is_paid(shop, require_paid) and shop.get("category")
            }
        )
