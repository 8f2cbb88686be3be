from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from core.pricing import amount_until_free_shipping, calculate_discount, format_price

# Resolve template directory relative to this file
TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    keep_trailing_newline=True,
    trim_blocks=True,
    lstrip_blocks=True,
)


def _price_data(price: float, sale_price: float | None) -> dict:
    return {
        "price_str": format_price(price),
        "sale_price_str": format_price(sale_price) if sale_price is not None else "",
        "discount": calculate_discount(price, sale_price),
    }


def build_cart_text(cart) -> str:
    template = env.get_template("cart.txt")

    lines = []
    for it in cart.items:
        row = {
            "name": it.name,
            "size": it.size,
            "color": it.color,
            "quantity": it.quantity,
            "line_total_str": format_price(it.unit_price * it.quantity),
        }
        row.update(_price_data(it.price, it.sale_price))
        lines.append(row)

    total = cart.get_total_price()
    remaining = amount_until_free_shipping(total)

    ctx = {
        "name": cart.name,
        "is_open": cart.is_open,
        "lines": lines,
        "total_items": cart.get_total_items(),
        "total_str": format_price(total),
        "free_shipping_str": format_price(remaining) if remaining > 0 else "",
    }
    return template.render(**ctx)


def build_wishlist_text(wishlist) -> str:
    template = env.get_template("wishlist.txt")

    entries = []
    for it in wishlist.items:
        row = {"name": it.name, "slug": it.slug}
        row.update(_price_data(it.price, it.sale_price))
        entries.append(row)

    ctx = {
        "name": wishlist.name,
        "entries": entries,
        "total_items": wishlist.get_total_items(),
    }
    return template.render(**ctx)
