"""Tests for the InventoryItem aggregate."""

import pytest
from protean.exceptions import ValidationError

from backoffice.inventory.item import InventoryItem


def _item(**overrides):
    defaults = {"name": "Desk Lamp", "sku": "LAMP01", "quantity": 5, "threshold": 4, "price": 20.0}
    defaults.update(overrides)
    return InventoryItem(**defaults)


class TestLowStock:
    def test_above_threshold(self):
        assert not _item(quantity=5, threshold=4).is_low_stock

    def test_at_threshold_is_low(self):
        assert _item(quantity=4, threshold=4).is_low_stock

    def test_below_threshold_is_low(self):
        assert _item(quantity=0, threshold=4).is_low_stock


class TestValidation:
    def test_negative_quantity_rejected(self):
        with pytest.raises(ValidationError):
            _item(quantity=-1)

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            _item(price=-0.01)

    def test_sku_required(self):
        with pytest.raises(ValidationError):
            InventoryItem(name="Desk Lamp", quantity=1)


class TestRevised:
    def test_returns_new_instance_with_same_id(self):
        item = _item()
        revised = item.revised(quantity=3)

        assert revised is not item
        assert revised.id == item.id
        assert revised.quantity == 3
        assert item.quantity == 5

    def test_unchanged_fields_carried_over(self):
        item = _item(category="Lighting", warranty_period=12)
        revised = item.revised(price=25.0)

        assert revised.category == "Lighting"
        assert revised.warranty_period == 12
        assert revised.sku == "LAMP01"

    def test_unknown_field_rejected(self):
        with pytest.raises(ValueError) as exc:
            _item().revised(colour="red")
        assert "colour" in str(exc.value)

    def test_invalid_change_rejected(self):
        with pytest.raises(ValidationError):
            _item().revised(quantity=-2)
