"""Cart aggregate — the session's shopping cart, bounded by live stock.

Each line is a snapshot of an InventoryItem at the moment it was added
plus the quantity the staff member wants to sell. Quantities are checked
against the stock level passed in with each mutation; the cart does not
watch inventory on its own and any staleness is settled by the server at
checkout.
"""

from datetime import UTC, datetime

import structlog
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from backoffice.domain import backoffice

logger = structlog.get_logger(__name__)


@backoffice.entity(part_of="Cart")
class CartLine:
    inventory_item_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    sku = String(required=True, max_length=50)
    category = String(max_length=100)
    unit_price = Float(required=True, min_value=0.0)
    cart_quantity = Integer(required=True, min_value=1)

    @property
    def line_total(self) -> float:
        return self.unit_price * self.cart_quantity


@backoffice.aggregate
class Cart:
    lines = HasMany(CartLine)
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls):
        return cls(updated_at=datetime.now(UTC))

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def line_for(self, inventory_item_id) -> CartLine | None:
        return next(
            (line for line in self.lines if str(line.inventory_item_id) == str(inventory_item_id)),
            None,
        )

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def subtotal(self) -> float:
        return sum(line.line_total for line in self.lines)

    @property
    def total_items(self) -> int:
        return sum(line.cart_quantity for line in self.lines)

    def snapshot(self) -> list[dict]:
        """Plain-dict view of the lines, in insertion order, for the order request."""
        return [
            {
                "inventory_item_id": str(line.inventory_item_id),
                "name": line.name,
                "sku": line.sku,
                "category": line.category,
                "price": line.unit_price,
                "quantity": line.cart_quantity,
            }
            for line in self.lines
        ]

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_item(self, item, quantity=1) -> bool:
        """Add ``quantity`` of an inventory item, merging with an existing line.

        Returns False without touching the cart when the merged quantity would
        exceed the item's stock, or when ``quantity`` is not positive.
        """
        if quantity <= 0:
            return False

        existing = self.line_for(item.id)
        in_cart = existing.cart_quantity if existing else 0
        if in_cart + quantity > item.quantity:
            logger.info(
                "Cart add rejected",
                inventory_item_id=str(item.id),
                requested=quantity,
                in_cart=in_cart,
                stock=item.quantity,
            )
            return False

        if existing:
            existing.cart_quantity = in_cart + quantity
        else:
            self.add_lines(
                CartLine(
                    inventory_item_id=item.id,
                    name=item.name,
                    sku=item.sku,
                    category=item.category,
                    unit_price=item.price,
                    cart_quantity=quantity,
                )
            )

        self.updated_at = datetime.now(UTC)
        return True

    def update_quantity(self, inventory_item_id, new_quantity, stock) -> bool:
        """Set a line's quantity. Zero or less removes the line.

        ``stock`` is the item's current quantity on hand, or None when the item
        is no longer known to inventory; either an unknown item or a quantity
        above stock leaves the cart unchanged and returns False.
        """
        if new_quantity <= 0:
            self.remove(inventory_item_id)
            return True

        if stock is None or new_quantity > stock:
            return False

        line = self.line_for(inventory_item_id)
        if line is None:
            return False

        line.cart_quantity = new_quantity
        self.updated_at = datetime.now(UTC)
        return True

    def remove(self, inventory_item_id) -> None:
        line = self.line_for(inventory_item_id)
        if line is not None:
            self.remove_lines(line)
            self.updated_at = datetime.now(UTC)

    def clear(self) -> None:
        for line in list(self.lines):
            self.remove_lines(line)
        self.updated_at = datetime.now(UTC)
