"""Tests for the Discount aggregate and its eligibility conditions."""

import pytest
from protean.exceptions import ValidationError

from backoffice.discount.discount import Discount, DiscountCondition, DiscountType


class TestDiscountCode:
    def test_uppercase_alphanumeric_accepted(self):
        discount = Discount(code="SUMMER24", discount_type="Percentage", value=10)
        assert discount.code == "SUMMER24"

    @pytest.mark.parametrize("code", ["summer24", "SUMMER-24", "SUMMER 24", "ÉTÉ24"])
    def test_other_codes_rejected(self, code):
        with pytest.raises(ValidationError) as exc:
            Discount(code=code, discount_type="Percentage", value=10)
        assert "uppercase letters and digits" in str(exc.value)


class TestDiscountValue:
    def test_percentage_over_hundred_rejected(self):
        with pytest.raises(ValidationError) as exc:
            Discount(code="TOOMUCH", discount_type="Percentage", value=120)
        assert "cannot exceed 100" in str(exc.value)

    def test_fixed_amount_over_hundred_allowed(self):
        discount = Discount(code="FLAT150", discount_type="FixedAmount", value=150)
        assert discount.value == 150

    def test_negative_value_rejected(self):
        with pytest.raises(ValidationError):
            Discount(code="NEG", discount_type="FixedAmount", value=-5)

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            Discount(code="ODD", discount_type="BuyOneGetOne", value=5)


class TestDiscountDefaults:
    def test_active_by_default(self):
        discount = Discount(code="NEW", discount_type="Percentage", value=5)
        assert discount.is_active is True
        assert discount.used_count == 0

    def test_is_percentage(self):
        assert Discount(code="PCT", discount_type=DiscountType.PERCENTAGE.value, value=5).is_percentage
        assert not Discount(code="FIX", discount_type=DiscountType.FIXED_AMOUNT.value, value=5).is_percentage


class TestDiscountCondition:
    def test_empty_condition_always_met(self):
        assert DiscountCondition().is_met_by(0, 0)

    def test_min_spend(self):
        condition = DiscountCondition(min_spend=50.0)
        assert not condition.is_met_by(49.0, 10)
        assert condition.is_met_by(50.0, 0)

    def test_min_items(self):
        condition = DiscountCondition(min_items=3)
        assert not condition.is_met_by(1000, 2)
        assert condition.is_met_by(0, 3)


class TestDiscountRevision:
    def test_revised_keeps_identity(self):
        discount = Discount(code="SPRING", discount_type="Percentage", value=5)
        revised = discount.revised(value=8)

        assert revised.id == discount.id
        assert revised.value == 8
        assert discount.value == 5

    def test_revised_rejects_invalid_code(self):
        discount = Discount(code="SPRING", discount_type="Percentage", value=5)
        with pytest.raises(ValidationError):
            discount.revised(code="spring")
