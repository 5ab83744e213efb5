"""Order mutations after checkout — fulfilment status and deletion."""

import structlog
from protean.exceptions import ValidationError

from backoffice.gateway.port import GatewayError
from backoffice.order.events import OrderStatusChanged
from backoffice.order.order import OrderStatus
from backoffice.shared.service import MutationService

logger = structlog.get_logger(__name__)


class OrderService(MutationService):
    async def update_status(self, order_id, status) -> bool:
        """Move an order along its state machine.

        The transition is checked locally first; an invalid one never
        reaches the backend.
        """
        order = self.store.find("orders", order_id)
        if order is None:
            logger.warning("Status change for unknown order", order_id=str(order_id))
            return False

        try:
            order.assert_can_transition_to(status)
        except ValidationError as exc:
            self.report_invalid("update order status", exc, order_id=str(order_id), status=str(status))
            return False

        previous_status = order.status
        ticket = self.store.begin(f"orders:{order_id}")
        try:
            updated = await self.gateway.update_order_status(order_id, OrderStatus(status).value)
        except GatewayError as exc:
            self.report_failure("update order status", exc, order_id=str(order_id))
            return False

        if not self.store.is_current(ticket):
            return False
        self.store.replace("orders", updated)
        logger.info("Order status changed", order_id=str(order_id), previous=previous_status, status=updated.status)
        await self.bus.publish(
            OrderStatusChanged(order_id=updated.id, previous_status=previous_status, status=updated.status)
        )
        return True

    async def delete(self, order_id, hard: bool = False) -> bool:
        ticket = self.store.begin(f"orders:{order_id}")
        try:
            await self.gateway.delete_order(order_id, hard=hard)
        except GatewayError as exc:
            self.report_failure("delete order", exc, order_id=str(order_id), hard=hard)
            return False

        if not self.store.is_current(ticket):
            return False
        self.store.remove("orders", order_id)
        return True
