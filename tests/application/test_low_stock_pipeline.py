"""Application tests for the inventory update → low-stock alert pipeline."""

from backoffice.inventory.events import InventoryItemUpdated, LowStockCrossed

LOW_STOCK_MESSAGE = "Low stock alert for Desk Lamp. Current quantity: {}."


def _low_stock_notifications(engine):
    return [entry for entry in engine.notifications if entry.message.startswith("Low stock alert")]


class TestLowStockCrossing:
    async def test_crossing_fires_one_notification_and_one_email(self, engine, gateway):
        assert await engine.inventory.update("inv-lamp", quantity=3)

        alerts = _low_stock_notifications(engine)
        assert [alert.message for alert in alerts] == [LOW_STOCK_MESSAGE.format(3)]
        assert alerts[0].level == "warning"

        emails = gateway.calls_to("send_email")
        assert len(emails) == 1
        assert emails[0]["recipient"] == "manager@insophinia.test"
        assert emails[0]["subject"] == "Low Stock Alert: Desk Lamp"

    async def test_staying_low_fires_nothing(self, engine, gateway):
        await engine.inventory.update("inv-lamp", quantity=3)
        await engine.inventory.update("inv-lamp", quantity=2)

        assert len(_low_stock_notifications(engine)) == 1
        assert len(gateway.calls_to("send_email")) == 1

    async def test_restock_then_drop_fires_again(self, engine, gateway):
        await engine.inventory.update("inv-lamp", quantity=3)
        await engine.inventory.update("inv-lamp", quantity=20)
        await engine.inventory.update("inv-lamp", quantity=1)

        assert len(_low_stock_notifications(engine)) == 2
        assert len(gateway.calls_to("send_email")) == 2

    async def test_no_managers_means_no_email(self, engine, gateway):
        assert await engine.users.delete("user-manager")

        await engine.inventory.update("inv-lamp", quantity=3)

        assert len(_low_stock_notifications(engine)) == 1
        assert gateway.calls_to("send_email") == []

    async def test_all_managers_emailed_together(self, engine, gateway):
        assert await engine.users.add("Mia Manager", "mia@insophinia.test", "Manager", password="pw")

        await engine.inventory.update("inv-lamp", quantity=0)

        emails = gateway.calls_to("send_email")
        assert len(emails) == 1
        assert emails[0]["recipient"] == "mia@insophinia.test, manager@insophinia.test"

    async def test_email_failure_reported_as_notification(self, engine, gateway):
        gateway.configure(should_succeed=False, failure_reason="SMTP down", methods=["send_email"])

        assert await engine.inventory.update("inv-lamp", quantity=3)

        messages = [entry.message for entry in engine.notifications]
        assert "Error: Could not send email." in messages
        assert LOW_STOCK_MESSAGE.format(3) in messages

    async def test_failed_update_fires_nothing(self, engine, gateway):
        gateway.configure(should_succeed=False, methods=["update_inventory_item"])

        assert not await engine.inventory.update("inv-lamp", quantity=3)
        assert _low_stock_notifications(engine) == []
        assert engine.store.find("inventory", "inv-lamp").quantity == 5


class TestPublishedEvents:
    async def test_update_publishes_before_and_after(self, engine):
        seen = []

        async def capture(event):
            seen.append(event)

        engine.bus.subscribe(InventoryItemUpdated, capture)
        engine.bus.subscribe(LowStockCrossed, capture)

        await engine.inventory.update("inv-lamp", quantity=3)

        # The watcher runs first, so the crossing is captured before the update
        crossed, updated = seen
        assert isinstance(updated, InventoryItemUpdated)
        assert (updated.previous_quantity, updated.quantity) == (5, 3)
        assert (updated.previous_threshold, updated.threshold) == (4, 4)
        assert isinstance(crossed, LowStockCrossed)
        assert crossed.sku == "LAMP01"
