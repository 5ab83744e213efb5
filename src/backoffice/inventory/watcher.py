"""Low-stock watching — the inventory side of the event pipeline.

    InventoryItemUpdated
        └─ LowStockWatcher        → publishes LowStockCrossed on a crossing
    LowStockCrossed
        ├─ LowStockNotifier       → warning in the notification feed
        └─ LowStockEmailer        → alert email to every manager

Alerts are edge-triggered: they fire when an update takes an item from
above its threshold to at-or-below it, and stay quiet while it remains low.
"""

import structlog

from backoffice.inventory.events import InventoryItemUpdated, LowStockCrossed
from backoffice.notification.templates import EmailKind, render
from backoffice.shared.bus import handles
from backoffice.user.user import manager_emails

logger = structlog.get_logger(__name__)


def crosses_low_stock(previous_quantity, previous_threshold, quantity, threshold) -> bool:
    return previous_quantity > previous_threshold and quantity <= threshold


class LowStockWatcher:
    def __init__(self, bus) -> None:
        self.bus = bus

    @handles(InventoryItemUpdated)
    async def on_inventory_item_updated(self, event: InventoryItemUpdated) -> None:
        if not crosses_low_stock(event.previous_quantity, event.previous_threshold, event.quantity, event.threshold):
            return

        logger.info(
            "Low stock threshold crossed",
            item_id=str(event.item_id),
            sku=event.sku,
            quantity=event.quantity,
            threshold=event.threshold,
        )
        await self.bus.publish(
            LowStockCrossed(
                item_id=event.item_id,
                name=event.name,
                sku=event.sku,
                quantity=event.quantity,
                threshold=event.threshold,
            )
        )


class LowStockNotifier:
    def __init__(self, notifications) -> None:
        self.notifications = notifications

    @handles(LowStockCrossed)
    async def on_low_stock_crossed(self, event: LowStockCrossed) -> None:
        self.notifications.warning(f"Low stock alert for {event.name}. Current quantity: {event.quantity}.")


class LowStockEmailer:
    """Emails every Manager-role user when an item runs low."""

    def __init__(self, store, mailer) -> None:
        self.store = store
        self.mailer = mailer

    @handles(LowStockCrossed)
    async def on_low_stock_crossed(self, event: LowStockCrossed) -> None:
        recipients = manager_emails(self.store.users)
        if not recipients:
            logger.info("No managers to alert about low stock", sku=event.sku)
            return

        email = render(
            EmailKind.LOW_STOCK_ALERT,
            {"name": event.name, "sku": event.sku, "quantity": event.quantity, "threshold": event.threshold},
        )
        await self.mailer.send(", ".join(recipients), email["subject"], email["body"])
