"""Domain events for the Order aggregate."""

from protean.fields import Float, Identifier, String, Text

from backoffice.domain import backoffice


@backoffice.event(part_of="Order")
class OrderPlaced:
    """Checkout succeeded and the backend recorded the order.

    Carries everything needed to render the customer's receipt.
    """

    __version__ = 1

    order_id = Identifier(required=True)
    customer_name = String(required=True)
    customer_email = String(required=True)
    lines = Text(required=True)  # JSON: list of {name, quantity, price}
    subtotal = Float(required=True)
    discount_amount = Float()
    total = Float(required=True)


@backoffice.event(part_of="Order")
class OrderStatusChanged:
    """An order moved to a new fulfilment status."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    status = String(required=True)
