"""Tests for CartStore mutations and derived totals."""

from conftest import make_line
from stores.cart import CartStore


class TestAddItem:
    def test_new_variant_is_appended(self, cart):
        cart.add_item(make_line("v1"))
        cart.add_item(make_line("v2"))
        assert [it.variant_id for it in cart.items] == ["v1", "v2"]

    def test_same_variant_accumulates_quantity(self, cart):
        cart.add_item(make_line("v1", quantity=2))
        cart.add_item(make_line("v1", quantity=2))
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 4

    def test_merge_keeps_first_metadata(self, cart):
        cart.add_item(make_line("v1", name="Original", price=10.0))
        cart.add_item(make_line("v1", name="Renamed", price=99.0, sale_price=5.0))
        line = cart.items[0]
        assert line.name == "Original"
        assert line.price == 10.0
        assert line.sale_price is None
        assert line.quantity == 2

    def test_add_opens_cart(self, cart):
        assert cart.is_open is False
        cart.add_item(make_line())
        assert cart.is_open is True

    def test_merge_also_opens_cart(self, cart):
        cart.add_item(make_line())
        cart.close_cart()
        cart.add_item(make_line())
        assert cart.is_open is True

    def test_non_positive_quantity_is_accepted(self, cart):
        cart.add_item(make_line("v1", quantity=0))
        assert cart.items[0].quantity == 0
        cart.add_item(make_line("v2", quantity=-1))
        assert cart.get_item("v2").quantity == -1

    def test_stored_item_is_a_copy(self, cart):
        line = make_line("v1")
        cart.add_item(line)
        line.quantity = 50
        assert cart.items[0].quantity == 1

    def test_items_view_cannot_mutate_store(self, cart):
        cart.add_item(make_line("v1"))
        cart.items[0].quantity = 99
        assert cart.get_total_items() == 1


class TestRemoveItem:
    def test_removes_matching_variant(self, cart):
        cart.add_item(make_line("v1"))
        cart.add_item(make_line("v2"))
        cart.remove_item("v1")
        assert [it.variant_id for it in cart.items] == ["v2"]

    def test_absent_variant_is_noop(self, cart):
        cart.add_item(make_line("v1"))
        before = cart.dumps()
        cart.remove_item("nonexistent")
        assert cart.dumps() == before


class TestUpdateQuantity:
    def test_overwrites_quantity(self, cart):
        cart.add_item(make_line("v1", quantity=3))
        cart.update_quantity("v1", 7)
        assert cart.items[0].quantity == 7

    def test_zero_removes_item(self, cart):
        cart.add_item(make_line("v1", quantity=2))
        cart.add_item(make_line("v2", quantity=1))
        cart.update_quantity("v1", 0)
        assert cart.get_item("v1") is None
        assert cart.get_total_items() == 1

    def test_negative_removes_item(self, cart):
        cart.add_item(make_line("v1"))
        cart.update_quantity("v1", -3)
        assert len(cart) == 0

    def test_absent_variant_is_noop(self, cart, storage):
        cart.add_item(make_line("v1"))
        before = cart.dumps()
        stamp = storage.updated_at("test-cart")
        cart.update_quantity("nonexistent", 5)
        assert cart.dumps() == before
        assert storage.updated_at("test-cart") == stamp
        assert cart.get_item("nonexistent") is None

    def test_update_preserves_order(self, cart):
        for key in ("A", "B", "C"):
            cart.add_item(make_line(key))
        cart.update_quantity("B", 9)
        assert [it.variant_id for it in cart.items] == ["A", "B", "C"]


class TestDrawerFlag:
    def test_open_close_toggle(self, cart):
        cart.open_cart()
        assert cart.is_open
        cart.close_cart()
        assert not cart.is_open
        cart.toggle_cart()
        assert cart.is_open
        cart.toggle_cart()
        assert not cart.is_open

    def test_clear_keeps_flag(self, cart):
        cart.add_item(make_line())
        cart.clear_cart()
        assert cart.items == ()
        assert cart.is_open is True


class TestTotals:
    def test_empty_cart(self, cart):
        assert cart.get_total_items() == 0
        assert cart.get_total_price() == 0

    def test_sale_price_takes_precedence_per_line(self, cart):
        cart.add_item(make_line("v1", quantity=2, price=10.0, sale_price=8.0))
        cart.add_item(make_line("v2", quantity=1, price=20.0))
        assert cart.get_total_price() == 36
        assert cart.get_total_items() == 3

    def test_float_arithmetic(self, cart):
        for key in ("a", "b", "c"):
            cart.add_item(make_line(key, price=0.1))
        assert cart.get_total_price() == 0.1 + 0.1 + 0.1

    def test_amount_until_free_shipping(self, cart):
        cart.add_item(make_line("v1", quantity=2, price=10.0, sale_price=8.0))
        cart.add_item(make_line("v2", quantity=1, price=20.0))
        assert cart.amount_until_free_shipping() == 39.0
        cart.update_quantity("v2", 5)
        assert cart.amount_until_free_shipping() == 0.0


class TestPersistence:
    def test_round_trip(self, cart, storage):
        cart.add_item(make_line("v1", quantity=2, sale_price=8.0))
        cart.add_item(make_line("v2", size="L", color="Noir"))
        cart.close_cart()

        restored = CartStore("test-cart", storage)
        assert restored.items == cart.items
        assert restored.is_open is False
        assert restored.serialize() == cart.serialize()

    def test_serialized_layout(self, cart):
        cart.add_item(make_line("v1", sale_price=8.0))
        data = cart.serialize()
        assert data["isOpen"] is True
        record = data["items"][0]
        assert record["id"] == "p1-v1"
        assert record["variantId"] == "v1"
        assert record["salePrice"] == 8.0

    def test_deserialize_into_fresh_instance(self, cart, storage):
        cart.add_item(make_line("v1", quantity=3))
        fresh = CartStore("other-cart", storage)
        fresh.deserialize(cart.serialize())
        assert fresh.items == cart.items
        assert fresh.is_open == cart.is_open
