"""Home feed: the four ranking lists the home page shows."""

import asyncio

from core.logger import get_logger

from ..models.enums import Rail
from ..models.schemas import HomeFeed
from .proximity import ProximityQuery, ProximityRanker

logger = get_logger("home_feed")

# (feed field, rail) in the order the page requests them
FEED_SLOTS = (
    ("nearby", None),
    ("left", Rail.LEFT.value),
    ("right", Rail.RIGHT.value),
    ("hero", Rail.HERO.value),
)


async def build_home_feed(ranker: ProximityRanker, lat: float, lng: float) -> HomeFeed:
    """Run the general and per-rail rankings concurrently.

    Each slot fails independently: an error in one ranking leaves that list
    empty and is logged, the others are still served.

    Raises:
        ValidationError: lat or lng is zero
    """
    queries = [ProximityQuery.parse(lat, lng, rail) for _, rail in FEED_SLOTS]
    results = await asyncio.gather(
        *(ranker.rank(query) for query in queries), return_exceptions=True
    )

    feed = HomeFeed()
    for (slot, rail), result in zip(FEED_SLOTS, results):
        if isinstance(result, Exception):
            logger.error("Home feed slot failed", slot=slot, rail=rail, error=str(result))
            continue
        if isinstance(result, BaseException):
            raise result
        setattr(feed, slot, result)

    return feed
