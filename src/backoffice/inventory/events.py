"""Domain events for the InventoryItem aggregate."""

from protean.fields import Identifier, Integer, String

from backoffice.domain import backoffice


@backoffice.event(part_of="InventoryItem")
class InventoryItemUpdated:
    """An inventory edit was accepted by the backend.

    Carries both sides of the update so downstream handlers can reason
    about transitions without reading local state.
    """

    __version__ = 1

    item_id = Identifier(required=True)
    name = String(required=True)
    sku = String(required=True)
    previous_quantity = Integer(required=True)
    previous_threshold = Integer(required=True)
    quantity = Integer(required=True)
    threshold = Integer(required=True)


@backoffice.event(part_of="InventoryItem")
class LowStockCrossed:
    """Stock moved from above its threshold to at-or-below it."""

    __version__ = 1

    item_id = Identifier(required=True)
    name = String(required=True)
    sku = String(required=True)
    quantity = Integer(required=True)
    threshold = Integer(required=True)
