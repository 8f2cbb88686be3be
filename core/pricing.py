# core/pricing.py
import os

FREE_SHIPPING_THRESHOLD = float(os.getenv("FREE_SHIPPING_THRESHOLD", "75"))


def format_price(amount: float | None, currency: str = "USD") -> str:
    if amount is None:
        return "Unavailable"
    if currency == "USD":
        return f"${amount:,.2f}"
    return f"{currency} {amount:,.2f}"


def calculate_discount(price: float, sale_price: float | None) -> int:
    """Whole-percent discount of sale_price against price, 0 if none."""
    if not sale_price or price <= 0 or sale_price >= price:
        return 0
    return round((price - sale_price) * 100.0 / price)


def amount_until_free_shipping(
    total: float, threshold: float | None = None
) -> float:
    if threshold is None:
        threshold = FREE_SHIPPING_THRESHOLD
    return max(0.0, threshold - total)
