"""Directory Router - Shop listing endpoints.

Read paths never surface store failures: the browser expects arrays, so
upstream errors are logged and answered with ``[]`` or the static category
list. Only a malformed request (missing coordinates) gets an error body.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Response

import app_state
from config import AppConfig
from core.exceptions import AppError
from core.logger import get_logger

from .engine.categories import CategoryCatalog
from .engine.feed import build_home_feed
from .engine.proximity import ProximityQuery, ProximityRanker
from .engine.search import ShopSearch, run_search
from .models.schemas import HomeFeed, NearbyShop, SearchShop
from .storage.shop_store import ShopStore

logger = get_logger("directory_router")

router = APIRouter(prefix="/api", tags=["Directory"])

NEARBY_CACHE_CONTROL = "public, s-maxage=60, stale-while-revalidate=300"


# =============================================================================
# DEPENDENCY INJECTION
# =============================================================================


def get_ranker() -> ProximityRanker:
    return app_state.get_ranker()


def get_shop_store() -> ShopStore:
    return app_state.get_shop_store()


def get_category_catalog() -> CategoryCatalog:
    return app_state.get_category_catalog()


def get_app_config() -> AppConfig:
    return app_state.get_app_config()


# =============================================================================
# ENDPOINTS
# =============================================================================


@router.get("/nearby", response_model=list[NearbyShop], response_model_by_alias=True)
async def nearby_shops(
    response: Response,
    lat: Optional[str] = None,
    lng: Optional[str] = None,
    rail: Optional[str] = None,
    ranker: ProximityRanker = Depends(get_ranker),
):
    """Shops around ``lat``/``lng``, nearest first, capped per rail.

    - no rail: up to 100
    - ``hero``: up to 5
    - any other rail: up to 2
    """
    query = ProximityQuery.parse(lat, lng, rail)

    try:
        shops = await ranker.rank(query)
    except (AppError, ValueError) as e:
        logger.error("Nearby query failed", rail=query.rail, error=str(e))
        return []

    logger.info("Nearby shops fetched", rail=query.rail, count=len(shops))
    response.headers["Cache-Control"] = NEARBY_CACHE_CONTROL
    return shops


@router.get("/home", response_model=HomeFeed, response_model_by_alias=True)
async def home_feed(
    lat: Optional[str] = None,
    lng: Optional[str] = None,
    ranker: ProximityRanker = Depends(get_ranker),
    config: AppConfig = Depends(get_app_config),
):
    """General list plus left, right and hero rails for one coordinate.

    Without coordinates the configured default location is used.
    """
    if not lat or not lng:
        lat, lng = config.default_lat, config.default_lng
        logger.info("Home feed using default location", lat=lat, lng=lng)

    query = ProximityQuery.parse(lat, lng)
    return await build_home_feed(ranker, query.lat, query.lng)


@router.get("/shops/search", response_model=list[SearchShop], response_model_by_alias=True)
async def search_shops(
    category: Optional[str] = None,
    pincode: Optional[str] = None,
    search: Optional[str] = None,
    limit: Optional[str] = None,
    store: ShopStore = Depends(get_shop_store),
    config: AppConfig = Depends(get_app_config),
):
    """Case-insensitive search by category, exact pincode and free text."""
    shop_search = ShopSearch.parse(category, pincode, search, limit)

    try:
        shops = await run_search(store, shop_search, config.nearby_require_paid)
    except AppError as e:
        logger.error("Shop search failed", error=str(e))
        return []

    logger.info(
        "Shop search",
        category=shop_search.category,
        pincode=shop_search.pincode,
        search=shop_search.search,
        count=len(shops),
    )
    return shops


@router.get("/shops/categories", response_model=list[str])
async def shop_categories(catalog: CategoryCatalog = Depends(get_category_catalog)):
    """Distinct categories, or a static list when none are available."""
    return await catalog.list()

