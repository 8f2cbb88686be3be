import argparse
from typing import List, Optional

from core.logger import get_logger, set_level
from core.models import CartLineItem, WishlistItem
from core.report import build_cart_text, build_wishlist_text
import stores

logger = get_logger(__name__)


def _add_product_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--product-id", required=True)
    parser.add_argument("--name", required=True)
    parser.add_argument("--price", type=float, required=True)
    parser.add_argument("--sale-price", type=float, default=None)
    parser.add_argument("--image", default="")
    parser.add_argument("--slug", default="")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="storectl", description="Inspect and edit the persisted cart and wishlist."
    )
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default=None,
        help="override LOG_LEVEL for the store loggers",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    show = sub.add_parser("show", help="print a store summary")
    show.add_argument("kind", choices=sorted(stores.STORES))

    cart = sub.add_parser("cart", help="cart operations")
    cart_sub = cart.add_subparsers(dest="action", required=True)

    add = cart_sub.add_parser("add")
    _add_product_args(add)
    add.add_argument("--variant-id", required=True)
    add.add_argument("--quantity", type=int, default=1)
    add.add_argument("--size", default="")
    add.add_argument("--color", default="")

    remove = cart_sub.add_parser("remove")
    remove.add_argument("variant_id")

    qty = cart_sub.add_parser("qty")
    qty.add_argument("variant_id")
    qty.add_argument("quantity", type=int)

    for action in ("clear", "open", "close", "toggle"):
        cart_sub.add_parser(action)

    wishlist = sub.add_parser("wishlist", help="wishlist operations")
    wl_sub = wishlist.add_subparsers(dest="action", required=True)

    for action in ("add", "toggle"):
        _add_product_args(wl_sub.add_parser(action))

    for action in ("remove", "move"):
        p = wl_sub.add_parser(action)
        p.add_argument("product_id")

    wl_sub.add_parser("clear")

    return parser


def run_cart(args: argparse.Namespace) -> int:
    cart = stores.get_cart_store()

    if args.action == "add":
        cart.add_item(
            CartLineItem(
                product_id=args.product_id,
                variant_id=args.variant_id,
                name=args.name,
                price=args.price,
                quantity=args.quantity,
                sale_price=args.sale_price,
                image=args.image,
                size=args.size,
                color=args.color,
                slug=args.slug,
            )
        )
    elif args.action == "remove":
        cart.remove_item(args.variant_id)
    elif args.action == "qty":
        cart.update_quantity(args.variant_id, args.quantity)
    elif args.action == "clear":
        cart.clear_cart()
    elif args.action == "open":
        cart.open_cart()
    elif args.action == "close":
        cart.close_cart()
    elif args.action == "toggle":
        cart.toggle_cart()

    print(build_cart_text(cart), end="")
    return 0


def run_wishlist(args: argparse.Namespace) -> int:
    wishlist = stores.get_wishlist_store()

    if args.action in ("add", "toggle"):
        item = WishlistItem(
            product_id=args.product_id,
            name=args.name,
            price=args.price,
            sale_price=args.sale_price,
            image=args.image,
            slug=args.slug,
        )
        if args.action == "add":
            wishlist.add_item(item)
        else:
            wishlist.toggle_item(item)
    elif args.action == "remove":
        wishlist.remove_item(args.product_id)
    elif args.action == "clear":
        wishlist.clear_wishlist()
    elif args.action == "move":
        if not wishlist.move_to_cart(args.product_id, stores.get_cart_store()):
            logger.warning("Product '%s' is not in the wishlist.", args.product_id)
            return 1

    print(build_wishlist_text(wishlist), end="")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.log_level:
        set_level(args.log_level)

    if args.command == "show":
        store = stores.get_store(args.kind)
        text = build_cart_text(store) if args.kind == "cart" else build_wishlist_text(store)
        print(text, end="")
        return 0
    if args.command == "cart":
        return run_cart(args)
    return run_wishlist(args)


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except Exception as e:
        logger.exception("Fatal storectl error: %s", e)
        raise SystemExit(2)
