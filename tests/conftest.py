import pytest

import stores
from core.models import CartLineItem, WishlistItem
from core.storage import SqliteStorage
from stores.cart import CartStore
from stores.wishlist import WishlistStore


@pytest.fixture
def storage(tmp_path):
    return SqliteStorage(str(tmp_path / "state.sqlite3"))


@pytest.fixture(autouse=True)
def registry(storage):
    """Point the process-wide store registry at the per-test database."""
    stores.init_stores(storage)
    yield
    stores.init_stores(storage)


@pytest.fixture
def cart(storage):
    return CartStore("test-cart", storage)


@pytest.fixture
def wishlist(storage):
    return WishlistStore("test-wishlist", storage)


def make_line(variant_id="v1", quantity=1, **overrides):
    fields = {
        "product_id": "p1",
        "variant_id": variant_id,
        "name": "Silk Wrap Dress",
        "price": 10.0,
        "quantity": quantity,
        "image": "/img/dress.jpg",
        "size": "M",
        "color": "Rose",
        "slug": "silk-wrap-dress",
    }
    fields.update(overrides)
    return CartLineItem(**fields)


def make_wish(product_id="p1", **overrides):
    fields = {
        "product_id": product_id,
        "name": "Linen Tote",
        "price": 20.0,
        "image": "/img/tote.jpg",
        "slug": "linen-tote",
    }
    fields.update(overrides)
    return WishlistItem(**fields)
