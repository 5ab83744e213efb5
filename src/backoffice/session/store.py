"""Session state container.

StateStore holds every collection the back office shows for one
authenticated session, plus the cart, the notification feed and the
backup settings. It is created by the engine and handed to whatever needs
it; nothing reaches for it globally.

Responses from the gateway arrive out of order. Before a call, a mutator
takes a Ticket for the key it is about to change; when the response lands
it is applied only if that ticket is still the newest one issued for the
key and the store has not been cleared in the meantime.

Whole-collection reloads take a ticket of their own and merge with
``reconcile``, so a fetch that was already under way never undoes a local
write made after it started.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum

import structlog

from backoffice.cart.cart import Cart
from backoffice.notification.notification import NotificationCenter

logger = structlog.get_logger(__name__)

COLLECTIONS = ("inventory", "users", "inquiries", "orders", "discounts", "emails")


class BackupFrequency(Enum):
    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


@dataclass(frozen=True)
class BackupSettings:
    enabled: bool = False
    frequency: str = BackupFrequency.NONE.value
    last_backup_at: datetime | None = None

    def updated(self, **changes) -> "BackupSettings":
        if "frequency" in changes:
            changes["frequency"] = BackupFrequency(changes["frequency"]).value
        return replace(self, **changes)


@dataclass(frozen=True)
class Ticket:
    key: str
    number: int
    generation: int


@dataclass(frozen=True)
class StateSnapshot:
    """Read-only view of the session state at one instant."""

    user: object | None
    inventory: tuple = ()
    users: tuple = ()
    inquiries: tuple = ()
    orders: tuple = ()
    discounts: tuple = ()
    emails: tuple = ()
    cart_lines: tuple = ()
    cart_subtotal: float = 0.0
    cart_total_items: int = 0
    notifications: tuple = ()
    unread_count: int = 0
    backup_settings: BackupSettings = field(default_factory=BackupSettings)

    @property
    def low_stock_items(self) -> tuple:
        return tuple(item for item in self.inventory if item.is_low_stock)


class StateStore:
    def __init__(self) -> None:
        self.inventory: list = []
        self.users: list = []
        self.inquiries: list = []
        self.orders: list = []
        self.discounts: list = []
        self.emails: list = []

        self.cart = Cart.create()
        self.notifications = NotificationCenter()
        self.backup_settings = BackupSettings()

        self.generation = 0
        self._sequence = 0
        self._issued: dict[str, int] = {}
        self._written: dict[str, int] = {}

    # -------------------------------------------------------------------
    # Request sequencing
    # -------------------------------------------------------------------
    def begin(self, key: str) -> Ticket:
        """Issue the next ticket for ``key``, superseding any earlier one.

        Numbers come from one sequence shared by every key, so tickets can
        be ordered against writes to other keys.
        """
        self._sequence += 1
        self._issued[key] = self._sequence
        return Ticket(key=key, number=self._sequence, generation=self.generation)

    def is_current(self, ticket: Ticket) -> bool:
        current = ticket.generation == self.generation and self._issued.get(ticket.key) == ticket.number
        if not current:
            logger.info(
                "Discarding stale response",
                key=ticket.key,
                ticket=ticket.number,
                latest=self._issued.get(ticket.key),
                generation=ticket.generation,
                current_generation=self.generation,
            )
        return current

    def is_same_session(self, ticket: Ticket) -> bool:
        """True unless the store was cleared after ``ticket`` was issued.

        For additive changes (appends, prepends) where ordering between
        requests for the same key does not matter.
        """
        if ticket.generation != self.generation:
            logger.info("Discarding response from a previous session", key=ticket.key)
            return False
        return True

    # -------------------------------------------------------------------
    # Collections
    # -------------------------------------------------------------------
    def _collection(self, name: str) -> list:
        if name not in COLLECTIONS:
            raise KeyError(f"Unknown collection: {name}")
        return getattr(self, name)

    def find(self, collection: str, entity_id):
        return next((entity for entity in self._collection(collection) if str(entity.id) == str(entity_id)), None)

    def _mark_written(self, collection: str, entity_id) -> None:
        self._sequence += 1
        self._written[f"{collection}:{entity_id}"] = self._sequence

    def _touched_since(self, collection: str, entity_id, ticket: Ticket) -> bool:
        key = f"{collection}:{entity_id}"
        return max(self._issued.get(key, 0), self._written.get(key, 0)) > ticket.number

    def load(self, collection: str, entities) -> None:
        self._collection(collection)[:] = list(entities)

    def reconcile(self, collection: str, entities, ticket: Ticket) -> None:
        """Load a fetched collection without undoing later local changes.

        A record that was written locally, or had a request issued for it,
        after ``ticket`` keeps its local state: the local copy if it still
        exists, nothing if it was removed. Records added locally since then
        that the fetch does not know about stay at the front.
        """
        local = self._collection(collection)
        fetched = list(entities)
        fetched_ids = {str(entity.id) for entity in fetched}

        merged = []
        for entity in fetched:
            if not self._touched_since(collection, entity.id, ticket):
                merged.append(entity)
                continue
            kept = self.find(collection, entity.id)
            if kept is not None:
                merged.append(kept)

        added = [
            entity
            for entity in local
            if str(entity.id) not in fetched_ids and self._touched_since(collection, entity.id, ticket)
        ]
        local[:] = added + merged

    def prepend(self, collection: str, entity) -> None:
        self._collection(collection).insert(0, entity)
        self._mark_written(collection, entity.id)

    def replace(self, collection: str, entity) -> bool:
        """Swap in ``entity`` for the record with the same id. False if there is none."""
        entities = self._collection(collection)
        for index, existing in enumerate(entities):
            if str(existing.id) == str(entity.id):
                entities[index] = entity
                self._mark_written(collection, entity.id)
                return True
        return False

    def remove(self, collection: str, entity_id) -> None:
        entities = self._collection(collection)
        entities[:] = [entity for entity in entities if str(entity.id) != str(entity_id)]
        self._mark_written(collection, entity_id)

    @property
    def active_discounts(self) -> list:
        return [discount for discount in self.discounts if discount.is_active]

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def clear(self) -> None:
        """Drop all session state. Responses to requests issued before now are ignored."""
        for name in COLLECTIONS:
            setattr(self, name, [])
        self.cart = Cart.create()
        self.notifications.clear()
        self.backup_settings = BackupSettings()
        self._issued.clear()
        self._written.clear()
        self._sequence = 0
        self.generation += 1

    def snapshot(self, user=None) -> StateSnapshot:
        return StateSnapshot(
            user=user,
            inventory=tuple(self.inventory),
            users=tuple(self.users),
            inquiries=tuple(self.inquiries),
            orders=tuple(self.orders),
            discounts=tuple(self.discounts),
            emails=tuple(self.emails),
            cart_lines=tuple(self.cart.snapshot()),
            cart_subtotal=self.cart.subtotal,
            cart_total_items=self.cart.total_items,
            notifications=self.notifications.entries,
            unread_count=self.notifications.unread_count,
            backup_settings=self.backup_settings,
        )
