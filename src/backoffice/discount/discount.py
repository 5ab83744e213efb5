"""Discount aggregate — a promotion code with optional spend/item conditions."""

import re
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String, ValueObject

from backoffice.domain import backoffice
from backoffice.shared.revision import revise

_CODE_PATTERN = re.compile(r"^[A-Z0-9]+$")


class DiscountType(Enum):
    PERCENTAGE = "Percentage"
    FIXED_AMOUNT = "FixedAmount"


@backoffice.value_object(part_of="Discount")
class DiscountCondition:
    """Eligibility rules for a discount. A missing or zero bound means no constraint."""

    min_spend = Float(min_value=0.0)
    min_items = Integer(min_value=0)

    def is_met_by(self, subtotal, item_count) -> bool:
        if self.min_spend and subtotal < self.min_spend:
            return False
        if self.min_items and item_count < self.min_items:
            return False
        return True


@backoffice.aggregate
class Discount:
    code = String(required=True, max_length=50)
    description = String(max_length=500)
    discount_type = String(choices=DiscountType, required=True)
    value = Float(required=True, min_value=0.0)
    condition = ValueObject(DiscountCondition)
    is_active = Boolean(default=True)
    used_count = Integer(default=0)
    created_at = DateTime()

    @invariant.post
    def code_must_be_uppercase_alphanumeric(self):
        if self.code and not _CODE_PATTERN.match(self.code):
            raise ValidationError({"code": ["Discount codes must be uppercase letters and digits only"]})

    @invariant.post
    def percentage_cannot_exceed_hundred(self):
        if self.discount_type == DiscountType.PERCENTAGE.value and self.value is not None and self.value > 100:
            raise ValidationError({"value": ["A percentage discount cannot exceed 100"]})

    @property
    def is_percentage(self) -> bool:
        return self.discount_type == DiscountType.PERCENTAGE.value

    def applies_to(self, subtotal, item_count) -> bool:
        if not self.is_active:
            return False
        if self.condition is None:
            return True
        return self.condition.is_met_by(subtotal, item_count)

    def revised(self, **changes) -> "Discount":
        return revise(
            self,
            ("code", "description", "discount_type", "value", "condition", "is_active", "used_count", "created_at"),
            **changes,
        )
