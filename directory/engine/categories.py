"""Distinct shop categories with a static fallback list."""

from typing import TYPE_CHECKING, Optional

from core.exceptions import AppError
from core.logger import get_logger

if TYPE_CHECKING:
    from ..storage.shop_store import ShopStore

logger = get_logger("categories")

FALLBACK_CATEGORIES = [
    "Restaurant",
    "Hotels",
    "Electronics",
    "Fashion",
    "Wellness",
    "Cafe",
    "Fitness",
    "Beauty",
    "Healthcare",
    "Education",
    "Automotive",
    "Grocery",
    "Shopping",
    "AC Repair",
    "Plumber",
    "Electrician",
]


class CategoryCatalog:
    """Lists categories of paid-eligible shops.

    The static list is served when no store is configured, the store fails,
    or it has no categories yet.
    """

    def __init__(self, store: Optional["ShopStore"], require_paid: bool = False):
        self.store = store
        self.require_paid = require_paid

    async def list(self) -> list[str]:
        if self.store is None:
            logger.warning("Shop store not configured, serving fallback categories")
            return list(FALLBACK_CATEGORIES)

        try:
            raw = await self.store.categories(self.require_paid)
        except AppError as e:
            logger.error("Category lookup failed", error=str(e))
            return list(FALLBACK_CATEGORIES)

        categories = sorted({c for c in raw if isinstance(c, str) and c})
        if not categories:
            logger.warning("No categories found, serving fallback")
            return list(FALLBACK_CATEGORIES)

        logger.info("Categories fetched", count=len(categories))
        return categories
