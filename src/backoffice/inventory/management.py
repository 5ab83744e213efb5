"""Inventory mutations — add, edit and delete stock items."""

import structlog
from protean.exceptions import ValidationError

from backoffice.gateway.port import GatewayError
from backoffice.inventory.events import InventoryItemUpdated
from backoffice.inventory.item import InventoryItem
from backoffice.shared.service import MutationService

logger = structlog.get_logger(__name__)


class InventoryService(MutationService):
    async def add(self, **fields) -> bool:
        try:
            item = InventoryItem(**fields)
        except ValidationError as exc:
            self.report_invalid("add inventory item", exc)
            return False

        ticket = self.store.begin("inventory")
        try:
            created = await self.gateway.create_inventory_item(item)
        except GatewayError as exc:
            self.report_failure("add inventory item", exc, sku=item.sku)
            return False

        if not self.store.is_same_session(ticket):
            return False
        self.store.prepend("inventory", created)
        logger.info("Inventory item added", item_id=str(created.id), sku=created.sku)
        return True

    async def update(self, item_id, **changes) -> bool:
        """Apply ``changes`` to an item through the backend.

        The accepted update is published as InventoryItemUpdated with both
        the before and after stock levels, which drives low-stock alerts.
        """
        previous = self.store.find("inventory", item_id)
        if previous is None:
            logger.warning("Update for unknown inventory item", item_id=str(item_id))
            return False

        try:
            revised = previous.revised(**changes)
        except (ValidationError, ValueError) as exc:
            self.report_invalid("update inventory item", exc, item_id=str(item_id))
            return False

        ticket = self.store.begin(f"inventory:{item_id}")
        try:
            updated = await self.gateway.update_inventory_item(revised)
        except GatewayError as exc:
            self.report_failure("update inventory item", exc, item_id=str(item_id))
            return False

        if not self.store.is_current(ticket):
            return False

        self.store.replace("inventory", updated)
        logger.info(
            "Inventory item updated",
            item_id=str(updated.id),
            previous_quantity=previous.quantity,
            quantity=updated.quantity,
        )
        await self.bus.publish(
            InventoryItemUpdated(
                item_id=updated.id,
                name=updated.name,
                sku=updated.sku,
                previous_quantity=previous.quantity,
                previous_threshold=previous.threshold,
                quantity=updated.quantity,
                threshold=updated.threshold,
            )
        )
        return True

    async def delete(self, item_id, hard: bool = False) -> bool:
        ticket = self.store.begin(f"inventory:{item_id}")
        try:
            await self.gateway.delete_inventory_item(item_id, hard=hard)
        except GatewayError as exc:
            self.report_failure("delete inventory item", exc, item_id=str(item_id), hard=hard)
            return False

        if not self.store.is_current(ticket):
            return False
        self.store.remove("inventory", item_id)
        self.store.cart.remove(item_id)
        logger.info("Inventory item deleted", item_id=str(item_id), hard=hard)
        return True
