"""
Process-wide access to the cart and wishlist stores.

Call `init_stores()` once at start-up to choose the snapshot storage; the
first `get_store()` for a kind builds its single instance, which rehydrates
from storage at that moment. Without an explicit `init_stores()` call the
storage at DB_PATH is used.
"""
import os
from typing import Dict, Optional

from core.storage import SqliteStorage

from .base import PersistedStore
from .cart import CartStore
from .wishlist import WishlistStore

CART_STORE_NAME = os.getenv("CART_STORE_NAME", "goddess-cart")
WISHLIST_STORE_NAME = os.getenv("WISHLIST_STORE_NAME", "goddess-wishlist")

STORES = {
    "cart": (CartStore, CART_STORE_NAME),
    "wishlist": (WishlistStore, WISHLIST_STORE_NAME),
}

_storage: Optional[SqliteStorage] = None
_instances: Dict[str, PersistedStore] = {}


def init_stores(storage: Optional[SqliteStorage] = None) -> SqliteStorage:
    """Set the shared storage and forget any previously built instances."""
    global _storage
    _storage = storage or SqliteStorage()
    _instances.clear()
    return _storage


def get_store(kind: str) -> PersistedStore:
    if kind not in STORES:
        raise KeyError(f"Unknown store kind '{kind}'")

    store = _instances.get(kind)
    if store is None:
        if _storage is None:
            init_stores()
        store_cls, name = STORES[kind]
        store = store_cls(name, _storage)
        _instances[kind] = store
    return store


def get_cart_store() -> CartStore:
    return get_store("cart")


def get_wishlist_store() -> WishlistStore:
    return get_store("wishlist")


__all__ = [
    "CartStore",
    "PersistedStore",
    "STORES",
    "WishlistStore",
    "get_cart_store",
    "get_store",
    "get_wishlist_store",
    "init_stores",
]
