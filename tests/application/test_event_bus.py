"""Application tests for the in-process event bus."""

from backoffice.inquiry.events import InquiryReceived, InquiryStatusChanged
from backoffice.inventory.events import InventoryItemUpdated, LowStockCrossed
from backoffice.order.events import OrderPlaced, OrderStatusChanged
from backoffice.shared.bus import EventBus, handles


def _status_changed():
    return OrderStatusChanged(order_id="ord-1", previous_status="Processing", status="Shipped")


class Recorder:
    def __init__(self, name, seen):
        self.name = name
        self.seen = seen

    @handles(OrderStatusChanged)
    async def on_status_changed(self, event):
        self.seen.append((self.name, event.status))


class Exploding:
    @handles(OrderStatusChanged)
    async def on_status_changed(self, event):
        raise RuntimeError("boom")


async def test_handlers_run_in_registration_order():
    bus = EventBus()
    seen = []
    bus.register(Recorder("first", seen))
    bus.register(Recorder("second", seen))

    await bus.publish(_status_changed())

    assert seen == [("first", "Shipped"), ("second", "Shipped")]


async def test_failing_handler_does_not_stop_the_rest():
    bus = EventBus()
    seen = []
    bus.register(Exploding())
    bus.register(Recorder("after", seen))

    await bus.publish(_status_changed())

    assert seen == [("after", "Shipped")]


async def test_event_without_handlers_is_a_no_op():
    await EventBus().publish(_status_changed())


async def test_plain_coroutine_subscription():
    bus = EventBus()
    seen = []

    async def handler(event):
        seen.append(event.order_id)

    bus.subscribe(OrderStatusChanged, handler)
    await bus.publish(_status_changed())

    assert seen == ["ord-1"]


def test_event_versions_are_integers():
    for event_class in (
        InquiryReceived,
        InquiryStatusChanged,
        InventoryItemUpdated,
        LowStockCrossed,
        OrderPlaced,
        OrderStatusChanged,
    ):
        assert event_class.__version__ == 1
