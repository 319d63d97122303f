"""Filtered shop search (category, pincode, free text)."""

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

from pydantic import ValidationError as PydanticValidationError

from core.logger import get_logger
from utils.validators import bounded_limit

from ..models.schemas import DEFAULT_RATING, SearchShop
from .filters import paid_filter

if TYPE_CHECKING:
    from ..storage.shop_store import ShopStore

logger = get_logger("shop_search")

DEFAULT_SEARCH_LIMIT = 20
MAX_SEARCH_LIMIT = 100

# Fields touched by the free-text ``search`` term
SEARCH_FIELDS = ("shopName", "category", "address")


def _contains(term: str) -> dict[str, Any]:
    """Case-insensitive substring match on the literal user input."""
    return {"$regex": re.escape(term), "$options": "i"}


@dataclass(frozen=True)
class ShopSearch:
    """Search request. Empty strings count as absent filters."""

    category: str = ""
    pincode: str = ""
    search: str = ""
    limit: int = DEFAULT_SEARCH_LIMIT

    @classmethod
    def parse(
        cls,
        category: Optional[str] = None,
        pincode: Optional[str] = None,
        search: Optional[str] = None,
        limit: Any = None,
    ) -> "ShopSearch":
        return cls(
            category=(category or "").strip(),
            pincode=(pincode or "").strip(),
            search=(search or "").strip(),
            limit=bounded_limit(limit, DEFAULT_SEARCH_LIMIT, 1, MAX_SEARCH_LIMIT),
        )

    def matches(self, shop: dict[str, Any]) -> bool:
        """In-process version of :func:`build_search_filter` (without the paid rule)."""
        if self.category and not _icontains(shop.get("category"), self.category):
            return False
        if self.pincode and str(shop.get("pincode", "")) != self.pincode:
            return False
        if self.search and not any(
            _icontains(shop.get(field), self.search) for field in SEARCH_FIELDS
        ):
            return False
        return True


def _icontains(value: Any, term: str) -> bool:
    return isinstance(value, str) and term.lower() in value.lower()


def build_search_filter(search: ShopSearch, require_paid: bool) -> dict[str, Any]:
    """``$and`` of paid eligibility plus every filter present in ``search``."""
    clauses: list[dict[str, Any]] = [paid_filter(require_paid)]

    if search.category:
        clauses.append({"category": _contains(search.category)})

    if search.pincode:
        clauses.append({"pincode": search.pincode})

    if search.search:
        clauses.append({"$or": [{field: _contains(search.search)} for field in SEARCH_FIELDS]})

    return {"$and": clauses}


def build_search_pipeline(search: ShopSearch, require_paid: bool) -> list[dict[str, Any]]:
    return [
        {"$match": build_search_filter(search, require_paid)},
        {"$sort": {"lastPaymentDate": -1}},
        {"$limit": search.limit},
        {
            "$project": {
                "_id": 0,
                "id": {"$toString": "$_id"},
                "name": "$shopName",
                "category": 1,
                "rating": {"$ifNull": ["$rating", DEFAULT_RATING]},
                "photoUrl": 1,
                "shopUrl": 1,
                "planType": 1,
                "pincode": 1,
                "address": 1,
                "mobile": 1,
                "visitorCount": {"$ifNull": ["$visitorCount", 0]},
            }
        },
    ]


async def run_search(store: "ShopStore", search: ShopSearch, require_paid: bool) -> list[SearchShop]:
    """Run ``search`` against ``store``.

    Raises:
        UpstreamUnavailable: Store failure
    """
    rows = await store.search(search, require_paid)
    shops = []
    for row in rows:
        try:
            shops.append(SearchShop.model_validate(row))
        except PydanticValidationError as e:
            # A malformed record is dropped, the rest still list
            logger.warning("Shop row rejected", shop_id=row.get("id"), errors=e.error_count())
    return shops
