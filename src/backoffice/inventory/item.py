"""InventoryItem aggregate — the authoritative stock record mirrored from the backend.

Quantity is owned by the server. The client never decrements it locally:
checkout re-fetches inventory and edits go through the gateway, whose
response replaces the local copy.
"""

from protean.fields import Float, Integer, String

from backoffice.domain import backoffice
from backoffice.shared.revision import revise

# Fields a staff edit may change; identity is never part of an edit
_EDITABLE_FIELDS = (
    "name",
    "sku",
    "quantity",
    "threshold",
    "price",
    "category",
    "image_url",
    "warranty_period",
)


@backoffice.aggregate
class InventoryItem:
    """One stock-keeping unit with its quantity on hand and low-stock threshold."""

    name = String(required=True, max_length=255)
    sku = String(required=True, max_length=50)
    quantity = Integer(default=0, min_value=0)
    threshold = Integer(default=0, min_value=0)
    price = Float(default=0.0, min_value=0.0)
    category = String(max_length=100)
    image_url = String(max_length=500)
    warranty_period = Integer(min_value=0)  # months

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.threshold

    def revised(self, **changes) -> "InventoryItem":
        """Return a new InventoryItem with the same identity and the given changes applied.

        The receiver is left untouched so it can still serve as the
        pre-update state for low-stock crossing detection.
        """
        return revise(self, _EDITABLE_FIELDS, **changes)
