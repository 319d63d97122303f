"""Directory Schemas - Pydantic models for shop listings.

Wire names are camelCase (``photoUrl``, ``planType``...) to match what the
browser already consumes; attributes are snake_case.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_RATING = 4.5


class ShopCard(BaseModel):
    """Fields shared by every shop listing."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    id: str
    name: str
    category: Optional[str] = None
    rating: float = DEFAULT_RATING
    photo_url: Optional[str] = Field(default=None, alias="photoUrl")
    shop_url: Optional[str] = Field(default=None, alias="shopUrl")
    plan_type: Optional[str] = Field(default=None, alias="planType")
    pincode: Optional[str] = None


class NearbyShop(ShopCard):
    """Shop ranked by distance; ``distance`` is null on the fallback path."""

    distance: Optional[float] = None
    owner: Optional[str] = None
    city: Optional[str] = None
    views: int = 0


class SearchShop(ShopCard):
    """Shop returned by the filtered search; ``name`` may be missing on the record."""

    name: Optional[str] = None
    address: Optional[str] = None
    mobile: Optional[str] = None
    visitor_count: int = Field(default=0, alias="visitorCount")


class HomeFeed(BaseModel):
    """Four ranking lists shown on the home page."""

    nearby: list[NearbyShop] = Field(default_factory=list)
    left: list[NearbyShop] = Field(default_factory=list)
    right: list[NearbyShop] = Field(default_factory=list)
    hero: list[NearbyShop] = Field(default_factory=list)
