"""Checkout — turns the session cart into an order.

Sequence:
    1. Validate customer details and that the cart has lines (no network).
    2. Pick the best applicable discount and express it as a percentage.
    3. Ask the backend to create the order; it re-checks and decrements
       stock and computes the final totals.
    4. On success: record the order, re-fetch inventory, empty the cart,
       notify, and publish OrderPlaced (which sends the receipt).
    5. On failure: report it and leave every piece of local state as it was.
"""

import json

import structlog
from protean.exceptions import ValidationError

from backoffice.discount.selector import effective_discount_percent, select_best_discount
from backoffice.gateway.port import GatewayError
from backoffice.order.events import OrderPlaced
from backoffice.order.order import CustomerDetails
from backoffice.shared.service import describe_validation_error

logger = structlog.get_logger(__name__)

DEFAULT_FAILURE_REASON = "Please check item stock levels."


class CheckoutOrchestrator:
    def __init__(self, gateway, store, bus, sync) -> None:
        self.gateway = gateway
        self.store = store
        self.bus = bus
        self.sync = sync

    async def checkout(self, customer: dict, acting_user=None):
        """Place an order for the current cart. Returns the Order, or None."""
        notifications = self.store.notifications
        cart = self.store.cart

        try:
            details = CustomerDetails(**customer)
        except ValidationError as exc:
            reason = describe_validation_error(exc)
            logger.warning("Checkout rejected: invalid customer details", reason=reason)
            notifications.error(f"Checkout failed: customer details are incomplete ({reason}).")
            return None

        if cart.is_empty:
            logger.warning("Checkout rejected: empty cart")
            notifications.error("Checkout failed: the cart is empty.")
            return None

        subtotal = cart.subtotal
        total_items = cart.total_items
        discount = select_best_discount(self.store.active_discounts, subtotal, total_items)
        discount_percent = effective_discount_percent(discount, subtotal)
        created_by = acting_user.id if acting_user is not None else None

        logger.info(
            "Checkout started",
            customer_email=details.email,
            lines=len(cart.lines),
            subtotal=subtotal,
            discount_code=discount.code if discount else None,
            discount_percent=discount_percent,
        )

        ticket = self.store.begin("checkout")
        try:
            order = await self.gateway.create_order(details, cart, discount_percent, created_by)
        except GatewayError as exc:
            logger.error("Checkout failed", error=exc.message, status_code=exc.status_code)
            notifications.error(f"Checkout failed: {exc.server_message or DEFAULT_FAILURE_REASON}")
            return None

        if not self.store.is_same_session(ticket):
            return None

        self.store.prepend("orders", order)
        await self.sync.refresh_inventory()
        self.store.cart.clear()

        notifications.info(f"New order created for {order.customer_name}.")
        notifications.info(f"Receipt for order #{order.id} is being sent to {order.customer_email}.")
        logger.info("Checkout completed", order_id=str(order.id), total=order.total)

        await self.bus.publish(
            OrderPlaced(
                order_id=order.id,
                customer_name=order.customer_name,
                customer_email=order.customer_email,
                lines=json.dumps(
                    [
                        {"name": line.name, "quantity": line.quantity, "price": line.price_at_purchase}
                        for line in order.lines
                    ]
                ),
                subtotal=order.subtotal,
                discount_amount=order.discount_amount,
                total=order.total,
            )
        )
        return order
