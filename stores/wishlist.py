# stores/wishlist.py
import dataclasses

from core.logger import get_logger
from core.models import CartLineItem, WishlistItem

from .base import PersistedStore, mutation
from .cart import CartStore

logger = get_logger(__name__)


class WishlistStore(PersistedStore):
    """Saved products keyed by product id; adding one twice is a no-op."""

    item_type = WishlistItem

    @mutation
    def add_item(self, item: WishlistItem) -> None:
        if self._find(item.product_id) is None:
            self._items.append(dataclasses.replace(item))

    @mutation
    def remove_item(self, product_id: str) -> None:
        self._items = [it for it in self._items if it.product_id != product_id]

    def is_in_wishlist(self, product_id: str) -> bool:
        return any(it.product_id == product_id for it in self._items)

    @mutation
    def clear_wishlist(self) -> None:
        self._items = []

    def get_total_items(self) -> int:
        return len(self._items)

    @mutation
    def toggle_item(self, item: WishlistItem) -> bool:
        """Remove the product if saved, save it otherwise. Returns membership."""
        if self.is_in_wishlist(item.product_id):
            self.remove_item(item.product_id)
            return False
        self.add_item(item)
        return True

    def move_to_cart(self, product_id: str, cart: CartStore) -> bool:
        """
        Add the saved product to the cart under its default variant, then
        drop it from the wishlist.
        """
        idx = self._find(product_id)
        if idx is None:
            logger.debug("move_to_cart: '%s' not in '%s'.", product_id, self.name)
            return False

        cart.add_item(CartLineItem.from_wishlist_item(self._items[idx]))
        self.remove_item(product_id)
        return True
