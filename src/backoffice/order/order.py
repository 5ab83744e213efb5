"""Order aggregate — a completed sale as recorded by the backend.

Orders are created server-side from the cart; the client only ever moves
them through the fulfilment state machine or deletes them.

State Machine:
    PROCESSING → SHIPPED → DELIVERED
    PROCESSING → CANCELLED
    SHIPPED → REFUNDED
"""

from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from backoffice.domain import backoffice


class OrderStatus(Enum):
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"
    REFUNDED = "Refunded"


_VALID_TRANSITIONS = {
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED, OrderStatus.REFUNDED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
    OrderStatus.REFUNDED: set(),  # Terminal
}


@backoffice.value_object
class CustomerDetails:
    """Who an order is for, as typed in at checkout. Every field is required."""

    name = String(required=True, max_length=255)
    email = String(required=True, max_length=254)
    contact = String(required=True, max_length=50)
    address = Text(required=True)

    @invariant.post
    def fields_must_not_be_blank(self):
        blank = [field for field in ("name", "email", "contact", "address") if not (getattr(self, field) or "").strip()]
        if blank:
            raise ValidationError({field: ["is required"] for field in blank})

    @invariant.post
    def email_must_look_like_an_address(self):
        if self.email and "@" not in self.email:
            raise ValidationError({"email": ["Invalid email address"]})


@backoffice.entity(part_of="Order")
class OrderLine:
    inventory_item_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    sku = String(max_length=50)
    quantity = Integer(required=True, min_value=1)
    price_at_purchase = Float(required=True, min_value=0.0)


@backoffice.aggregate
class Order:
    customer_name = String(required=True, max_length=255)
    customer_contact = String(max_length=50)
    customer_address = Text()
    customer_email = String(max_length=254)
    lines = HasMany(OrderLine)
    subtotal = Float(default=0.0)
    discount_amount = Float(default=0.0)
    total = Float(default=0.0)
    status = String(choices=OrderStatus, default=OrderStatus.PROCESSING.value)
    created_at = DateTime()
    created_by = Identifier()

    @property
    def is_terminal(self) -> bool:
        return not _VALID_TRANSITIONS[OrderStatus(self.status)]

    def can_transition_to(self, target) -> bool:
        return OrderStatus(target) in _VALID_TRANSITIONS[OrderStatus(self.status)]

    def assert_can_transition_to(self, target) -> None:
        """Raise ValidationError unless ``target`` is reachable from the current status."""
        try:
            target_status = OrderStatus(target)
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status: {target}"]}) from None

        if target_status not in _VALID_TRANSITIONS[OrderStatus(self.status)]:
            raise ValidationError(
                {"status": [f"Cannot change order from {self.status} to {target_status.value}"]}
            )

    def transition_to(self, target) -> None:
        self.assert_can_transition_to(target)
        self.status = OrderStatus(target).value
