"""Directory Storage - Shop backends."""

from .shop_store import MongoShopStore, SampleShopStore, ShopStore

__all__ = ["ShopStore", "MongoShopStore", "SampleShopStore"]
