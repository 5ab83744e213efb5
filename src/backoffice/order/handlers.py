"""Order event handlers — receipt email and status-change notices."""

import json

from backoffice.notification.templates import EmailKind, render
from backoffice.order.events import OrderPlaced, OrderStatusChanged
from backoffice.shared.bus import handles


class ReceiptEmailer:
    def __init__(self, mailer) -> None:
        self.mailer = mailer

    @handles(OrderPlaced)
    async def on_order_placed(self, event: OrderPlaced) -> None:
        email = render(
            EmailKind.ORDER_RECEIPT,
            {
                "order_id": str(event.order_id),
                "customer_name": event.customer_name,
                "lines": json.loads(event.lines),
                "subtotal": event.subtotal,
                "discount_amount": event.discount_amount,
                "total": event.total,
            },
        )
        await self.mailer.send(event.customer_email, email["subject"], email["body"])


class OrderStatusNotifier:
    def __init__(self, notifications) -> None:
        self.notifications = notifications

    @handles(OrderStatusChanged)
    async def on_order_status_changed(self, event: OrderStatusChanged) -> None:
        self.notifications.info(f'Order #{event.order_id} has been updated to "{event.status}".')
