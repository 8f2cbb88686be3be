"""Tests for the storectl command line."""

import pytest

import stores
import storectl


class TestCartCommands:
    def test_add_and_show(self, capsys):
        rc = storectl.main(
            [
                "cart", "add",
                "--product-id", "p1",
                "--variant-id", "v1",
                "--name", "Silk Wrap Dress",
                "--price", "10",
                "--sale-price", "8",
                "--quantity", "2",
            ]
        )
        assert rc == 0
        assert "Subtotal: $16.00" in capsys.readouterr().out

        assert storectl.main(["show", "cart"]) == 0
        assert "Silk Wrap Dress" in capsys.readouterr().out

    def test_qty_zero_removes(self, capsys):
        storectl.main(["cart", "add", "--product-id", "p1", "--variant-id", "v1",
                       "--name", "Dress", "--price", "10"])
        storectl.main(["cart", "qty", "v1", "0"])
        assert stores.get_cart_store().get_total_items() == 0

    def test_drawer_commands(self):
        storectl.main(["cart", "open"])
        assert stores.get_cart_store().is_open
        storectl.main(["cart", "toggle"])
        assert not stores.get_cart_store().is_open

    def test_unknown_action(self):
        with pytest.raises(SystemExit):
            storectl.main(["cart", "explode"])


class TestWishlistCommands:
    def _add(self, pid="p1"):
        return storectl.main(["wishlist", "add", "--product-id", pid,
                              "--name", "Linen Tote", "--price", "20"])

    def test_add_and_remove(self, capsys):
        assert self._add() == 0
        assert "Linen Tote" in capsys.readouterr().out
        storectl.main(["wishlist", "remove", "p1"])
        assert not stores.get_wishlist_store().is_in_wishlist("p1")

    def test_move_to_cart(self):
        self._add()
        assert storectl.main(["wishlist", "move", "p1"]) == 0
        assert stores.get_cart_store().get_item("p1-default").product_id == "p1"
        assert stores.get_wishlist_store().get_total_items() == 0

    def test_move_missing(self):
        assert storectl.main(["wishlist", "move", "nope"]) == 1

    def test_toggle(self):
        storectl.main(["wishlist", "toggle", "--product-id", "p2",
                       "--name", "Pearl Clip", "--price", "9.5"])
        assert stores.get_wishlist_store().is_in_wishlist("p2")
