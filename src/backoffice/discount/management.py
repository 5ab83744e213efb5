"""Discount code mutations."""

from datetime import UTC, datetime

import structlog
from protean.exceptions import ValidationError

from backoffice.discount.discount import Discount, DiscountCondition
from backoffice.gateway.port import GatewayError
from backoffice.shared.service import MutationService

logger = structlog.get_logger(__name__)

_CONDITION_FIELDS = ("min_spend", "min_items")


def _split_condition(fields: dict) -> dict:
    """Fold ``min_spend``/``min_items`` keyword arguments into a DiscountCondition."""
    if not any(name in fields for name in _CONDITION_FIELDS):
        return fields
    bounds = {name: fields.pop(name, None) for name in _CONDITION_FIELDS}
    fields["condition"] = DiscountCondition(**bounds) if any(v is not None for v in bounds.values()) else None
    return fields


class DiscountService(MutationService):
    async def add(self, code, discount_type, value, **fields) -> bool:
        try:
            discount = Discount(
                code=code,
                discount_type=discount_type,
                value=value,
                created_at=datetime.now(UTC),
                **_split_condition(fields),
            )
        except ValidationError as exc:
            self.report_invalid("add discount", exc, code=code)
            return False

        ticket = self.store.begin("discounts")
        try:
            created = await self.gateway.create_discount(discount)
        except GatewayError as exc:
            self.report_failure("add discount", exc, code=code)
            return False

        if not self.store.is_same_session(ticket):
            return False
        self.store.prepend("discounts", created)
        logger.info("Discount added", discount_id=str(created.id), code=created.code)
        return True

    async def update(self, discount_id, **changes) -> bool:
        existing = self.store.find("discounts", discount_id)
        if existing is None:
            logger.warning("Update for unknown discount", discount_id=str(discount_id))
            return False

        if any(name in changes for name in _CONDITION_FIELDS):
            current = existing.condition
            for name in _CONDITION_FIELDS:
                changes.setdefault(name, getattr(current, name) if current else None)

        try:
            revised = existing.revised(**_split_condition(changes))
        except (ValidationError, ValueError) as exc:
            self.report_invalid("update discount", exc, discount_id=str(discount_id))
            return False

        ticket = self.store.begin(f"discounts:{discount_id}")
        try:
            updated = await self.gateway.update_discount(revised)
        except GatewayError as exc:
            self.report_failure("update discount", exc, discount_id=str(discount_id))
            return False

        if not self.store.is_current(ticket):
            return False
        self.store.replace("discounts", updated)
        return True

    async def delete(self, discount_id, hard: bool = False) -> bool:
        ticket = self.store.begin(f"discounts:{discount_id}")
        try:
            await self.gateway.delete_discount(discount_id, hard=hard)
        except GatewayError as exc:
            self.report_failure("delete discount", exc, discount_id=str(discount_id), hard=hard)
            return False

        if not self.store.is_current(ticket):
            return False
        self.store.remove("discounts", discount_id)
        return True
