"""Tests for the Cart aggregate's stock-bounded line management."""

import pytest

from backoffice.cart.cart import Cart
from backoffice.inventory.item import InventoryItem


def _item(item_id="inv-lamp", quantity=5, price=20.0, **overrides):
    defaults = {
        "id": item_id,
        "name": "Desk Lamp",
        "sku": "LAMP01",
        "quantity": quantity,
        "threshold": 1,
        "price": price,
        "category": "Lighting",
    }
    defaults.update(overrides)
    return InventoryItem(**defaults)


class TestAddItem:
    def test_new_line_snapshots_item(self):
        cart = Cart.create()
        assert cart.add_item(_item(), 2) is True

        line = cart.line_for("inv-lamp")
        assert line.name == "Desk Lamp"
        assert line.sku == "LAMP01"
        assert line.unit_price == 20.0
        assert line.cart_quantity == 2

    def test_merges_with_existing_line(self):
        cart = Cart.create()
        item = _item()
        cart.add_item(item, 2)
        cart.add_item(item, 3)

        assert len(cart.lines) == 1
        assert cart.line_for("inv-lamp").cart_quantity == 5

    def test_rejects_more_than_stock(self):
        cart = Cart.create()
        assert cart.add_item(_item(quantity=3), 4) is False
        assert cart.is_empty

    def test_rejects_merge_beyond_stock_without_mutation(self):
        cart = Cart.create()
        item = _item(quantity=5)
        cart.add_item(item, 4)

        assert cart.add_item(item, 2) is False
        assert cart.line_for("inv-lamp").cart_quantity == 4

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_rejects_non_positive_quantity(self, quantity):
        cart = Cart.create()
        assert cart.add_item(_item(), quantity) is False
        assert cart.is_empty

    def test_out_of_stock_item_cannot_be_added(self):
        cart = Cart.create()
        assert cart.add_item(_item(quantity=0), 1) is False

    def test_lines_keep_insertion_order(self):
        cart = Cart.create()
        cart.add_item(_item("inv-b", sku="B1", name="B"), 1)
        cart.add_item(_item("inv-a", sku="A1", name="A"), 1)
        cart.add_item(_item("inv-b", sku="B1", name="B"), 1)

        assert [line["inventory_item_id"] for line in cart.snapshot()] == ["inv-b", "inv-a"]


class TestUpdateQuantity:
    def test_sets_quantity_within_stock(self):
        cart = Cart.create()
        cart.add_item(_item(quantity=5), 1)

        assert cart.update_quantity("inv-lamp", 5, stock=5) is True
        assert cart.line_for("inv-lamp").cart_quantity == 5

    def test_above_stock_fails_silently(self):
        cart = Cart.create()
        cart.add_item(_item(quantity=5), 2)

        assert cart.update_quantity("inv-lamp", 6, stock=5) is False
        assert cart.line_for("inv-lamp").cart_quantity == 2

    def test_unknown_inventory_item_fails(self):
        cart = Cart.create()
        cart.add_item(_item(), 2)

        assert cart.update_quantity("inv-lamp", 1, stock=None) is False
        assert cart.line_for("inv-lamp").cart_quantity == 2

    def test_zero_is_the_same_as_remove(self):
        removed = Cart.create()
        updated = Cart.create()
        for cart in (removed, updated):
            cart.add_item(_item(), 2)
            cart.add_item(_item("inv-chair", sku="CHAIR01", name="Chair"), 1)

        removed.remove("inv-lamp")
        updated.update_quantity("inv-lamp", 0, stock=5)

        assert updated.snapshot() == removed.snapshot()
        assert updated.line_for("inv-lamp") is None

    def test_negative_removes(self):
        cart = Cart.create()
        cart.add_item(_item(), 2)
        cart.update_quantity("inv-lamp", -3, stock=5)
        assert cart.is_empty


class TestRemoveAndClear:
    def test_remove_unknown_is_noop(self):
        cart = Cart.create()
        cart.add_item(_item(), 1)
        cart.remove("inv-missing")
        assert len(cart.lines) == 1

    def test_clear_empties_cart(self):
        cart = Cart.create()
        cart.add_item(_item(), 1)
        cart.add_item(_item("inv-chair", sku="CHAIR01", name="Chair"), 1)

        cart.clear()

        assert cart.is_empty
        assert cart.subtotal == 0
        assert cart.total_items == 0


class TestTotals:
    def test_subtotal_and_total_items(self):
        cart = Cart.create()
        cart.add_item(_item(price=20.0, quantity=5), 3)
        cart.add_item(_item("inv-chair", sku="CHAIR01", name="Chair", price=30.0, quantity=5), 2)

        assert cart.subtotal == pytest.approx(120.0)
        assert cart.total_items == 5

    def test_snapshot_is_plain_data(self):
        cart = Cart.create()
        cart.add_item(_item(), 2)

        assert cart.snapshot() == [
            {
                "inventory_item_id": "inv-lamp",
                "name": "Desk Lamp",
                "sku": "LAMP01",
                "category": "Lighting",
                "price": 20.0,
                "quantity": 2,
            }
        ]
