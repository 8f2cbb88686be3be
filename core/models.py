# core/models.py
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional

DEFAULT_VARIANT_SUFFIX = "default"
DEFAULT_SIZE = "M"
DEFAULT_COLOR = "Default"


def _to_price(value: Any) -> float:
    # Catalog prices arrive as floats, Decimals or numeric strings
    if isinstance(value, (int, float, Decimal)):
        return float(value)
    return float(str(value).strip())


def _to_sale_price(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    price = _to_price(value)
    return price or None


def default_variant_id(product_id: str) -> str:
    # Distinct per product so moved wishlist entries never merge in the cart
    return f"{product_id}-{DEFAULT_VARIANT_SUFFIX}"


def _first_image(product: Dict[str, Any]) -> str:
    image = product.get("image")
    if image:
        return image
    images = product.get("images") or []
    if images:
        first = images[0]
        if isinstance(first, dict):
            return first.get("url") or ""
        return str(first)
    return ""


@dataclass
class CartLineItem:
    """
    One cart line: a product variant, a quantity and a display snapshot
    of the product taken when the line was first added.
    """
    product_id: str
    variant_id: str
    name: str
    price: float
    quantity: int = 1
    sale_price: Optional[float] = None
    image: str = ""
    size: str = ""
    color: str = ""
    slug: str = ""

    @property
    def id(self) -> str:
        return f"{self.product_id}-{self.variant_id}"

    @property
    def merge_key(self) -> str:
        return self.variant_id

    @property
    def unit_price(self) -> float:
        return self.sale_price if self.sale_price is not None else self.price

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "productId": self.product_id,
            "variantId": self.variant_id,
            "name": self.name,
            "price": self.price,
            "image": self.image,
            "size": self.size,
            "color": self.color,
            "quantity": self.quantity,
            "slug": self.slug,
        }
        if self.sale_price is not None:
            out["salePrice"] = self.sale_price
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CartLineItem":
        """Build from a serialized record; unknown keys are ignored."""
        return cls(
            product_id=str(data["productId"]),
            variant_id=str(data["variantId"]),
            name=data["name"],
            price=_to_price(data["price"]),
            quantity=int(data.get("quantity", 1)),
            sale_price=(
                _to_price(data["salePrice"])
                if data.get("salePrice") is not None
                else None
            ),
            image=data.get("image") or "",
            size=data.get("size") or "",
            color=data.get("color") or "",
            slug=data.get("slug") or "",
        )

    @classmethod
    def from_product(
        cls,
        product: Dict[str, Any],
        variant: Dict[str, Any],
        quantity: int = 1,
    ) -> "CartLineItem":
        """
        Build a line from catalog product and variant records, the way the
        add-to-cart buttons do: prices are parsed to floats and a zero or
        missing sale price counts as no sale.
        """
        return cls(
            product_id=str(product["id"]),
            variant_id=str(variant["id"]),
            name=product["name"],
            price=_to_price(product["price"]),
            quantity=quantity,
            sale_price=_to_sale_price(product.get("salePrice")),
            image=_first_image(product),
            size=variant.get("size") or "",
            color=variant.get("color") or "",
            slug=product.get("slug") or "",
        )

    @classmethod
    def from_wishlist_item(cls, item: "WishlistItem") -> "CartLineItem":
        return cls(
            product_id=item.product_id,
            variant_id=default_variant_id(item.product_id),
            name=item.name,
            price=item.price,
            quantity=1,
            sale_price=item.sale_price,
            image=item.image,
            size=DEFAULT_SIZE,
            color=DEFAULT_COLOR,
            slug=item.slug,
        )


@dataclass
class WishlistItem:
    """A saved product. Membership only, no quantity."""
    product_id: str
    name: str
    price: float
    sale_price: Optional[float] = None
    image: str = ""
    slug: str = ""

    @property
    def id(self) -> str:
        return self.product_id

    @property
    def merge_key(self) -> str:
        return self.product_id

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "productId": self.product_id,
            "name": self.name,
            "price": self.price,
            "image": self.image,
            "slug": self.slug,
        }
        if self.sale_price is not None:
            out["salePrice"] = self.sale_price
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WishlistItem":
        return cls(
            product_id=str(data["productId"]),
            name=data["name"],
            price=_to_price(data["price"]),
            sale_price=(
                _to_price(data["salePrice"])
                if data.get("salePrice") is not None
                else None
            ),
            image=data.get("image") or "",
            slug=data.get("slug") or "",
        )

    @classmethod
    def from_product(cls, product: Dict[str, Any]) -> "WishlistItem":
        return cls(
            product_id=str(product["id"]),
            name=product["name"],
            price=_to_price(product["price"]),
            sale_price=_to_sale_price(product.get("salePrice")),
            image=_first_image(product),
            slug=product.get("slug") or "",
        )
