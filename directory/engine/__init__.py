"""Directory Engines - Ranking, search and category queries."""

from .categories import FALLBACK_CATEGORIES, CategoryCatalog
from .feed import build_home_feed
from .geo import EARTH_RADIUS_KM, great_circle_km
from .proximity import (
    ProximityPolicy,
    ProximityQuery,
    ProximityRanker,
    build_fallback_pipeline,
    build_nearby_pipeline,
)
from .search import ShopSearch, build_search_filter, build_search_pipeline

__all__ = [
    "EARTH_RADIUS_KM",
    "great_circle_km",
    "ProximityPolicy",
    "ProximityQuery",
    "ProximityRanker",
    "build_nearby_pipeline",
    "build_fallback_pipeline",
    "ShopSearch",
    "build_search_filter",
    "build_search_pipeline",
    "CategoryCatalog",
    "FALLBACK_CATEGORIES",
    "build_home_feed",
]
