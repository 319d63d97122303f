"""Directory Module - Local shop listings.

Architecture:
- models/: plan types, rail policies, shop summary schemas
- engine/: geo distance, proximity ranking, search, categories, home feed
- storage/: ShopStore backends (MongoDB, bundled sample data)
- router.py: FastAPI endpoints
"""

from .engine import CategoryCatalog, ProximityPolicy, ProximityQuery, ProximityRanker, ShopSearch
from .models import NearbyShop, PlanType, Rail, SearchShop
from .storage import MongoShopStore, SampleShopStore, ShopStore

__all__ = [
    "CategoryCatalog",
    "ProximityPolicy",
    "ProximityQuery",
    "ProximityRanker",
    "ShopSearch",
    "NearbyShop",
    "SearchShop",
    "PlanType",
    "Rail",
    "ShopStore",
    "MongoShopStore",
    "SampleShopStore",
]
