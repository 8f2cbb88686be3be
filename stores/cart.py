# stores/cart.py
import dataclasses
from typing import Any, Dict, Optional

from core.models import CartLineItem
from core.pricing import amount_until_free_shipping

from .base import PersistedStore, mutation


class CartStore(PersistedStore):
    """
    Cart lines keyed by variant, plus the open/closed state of the cart
    drawer. Adding a line that is already present only accumulates its
    quantity: the display snapshot (name, prices, image) taken on the first
    add is kept.
    """

    item_type = CartLineItem

    def _reset(self) -> None:
        super()._reset()
        self._is_open = False

    @property
    def is_open(self) -> bool:
        return self._is_open

    def serialize(self) -> Dict[str, Any]:
        data = super().serialize()
        data["isOpen"] = self._is_open
        return data

    def deserialize(self, data: Dict[str, Any]) -> None:
        super().deserialize(data)
        is_open = data.get("isOpen", False)
        if not isinstance(is_open, bool):
            raise ValueError(f"'isOpen' must be a boolean, got {is_open!r}")
        self._is_open = is_open

    @mutation
    def add_item(self, item: CartLineItem) -> None:
        idx = self._find(item.variant_id)
        if idx is not None:
            existing = self._items[idx]
            self._items[idx] = dataclasses.replace(
                existing, quantity=existing.quantity + item.quantity
            )
        else:
            self._items.append(dataclasses.replace(item))

        self._is_open = True

    @mutation
    def remove_item(self, variant_id: str) -> None:
        self._items = [it for it in self._items if it.variant_id != variant_id]

    @mutation
    def update_quantity(self, variant_id: str, quantity: int) -> None:
        if quantity <= 0:
            self.remove_item(variant_id)
            return

        idx = self._find(variant_id)
        if idx is None:
            return
        self._items[idx] = dataclasses.replace(self._items[idx], quantity=quantity)

    @mutation
    def clear_cart(self) -> None:
        self._items = []

    @mutation
    def open_cart(self) -> None:
        self._is_open = True

    @mutation
    def close_cart(self) -> None:
        self._is_open = False

    @mutation
    def toggle_cart(self) -> None:
        self._is_open = not self._is_open

    def get_item(self, variant_id: str) -> Optional[CartLineItem]:
        idx = self._find(variant_id)
        if idx is None:
            return None
        return dataclasses.replace(self._items[idx])

    def get_total_items(self) -> int:
        return sum(it.quantity for it in self._items)

    def get_total_price(self) -> float:
        total = 0.0
        for it in self._items:
            total += it.unit_price * it.quantity
        return total

    def amount_until_free_shipping(self) -> float:
        return amount_until_free_shipping(self.get_total_price())
