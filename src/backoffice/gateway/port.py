"""Remote data gateway port (abstract interface).

Every piece of state the back office shows lives on the backend. This is
the contract the engine talks to; swapping between FakeGateway (dev/test)
and RestGateway (a running backend) changes nothing above it.

All methods are coroutines. A call that reaches the server and is refused,
or that cannot reach it at all, raises GatewayError.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


class GatewayError(Exception):
    """A remote call failed. ``message`` is fit to show to staff.

    ``server_message`` is what the backend itself said, empty when the
    response carried no message or the server was never reached. It
    defaults to ``message``.
    """

    def __init__(self, message: str, status_code: int | None = None, server_message: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.server_message = message if server_message is None else server_message


@dataclass(frozen=True)
class BackupResult:
    """Outcome of a server-side backup."""

    message: str
    file: str | None = None


@dataclass(frozen=True)
class RestoreResult:
    """Outcome of a restore attempt. Failures are reported, not raised."""

    success: bool
    message: str


class RemoteDataGateway(ABC):
    """Abstract back-office backend interface."""

    # -------------------------------------------------------------------
    # Session
    # -------------------------------------------------------------------
    @abstractmethod
    async def login(self, email: str, password: str):
        """Authenticate and return ``(User, token)``."""
        ...

    @abstractmethod
    async def logout(self) -> None: ...

    async def aclose(self) -> None:
        """Release any connections held by the adapter."""

    @abstractmethod
    async def update_activity(self) -> None:
        """Record that the current user is still active."""
        ...

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    @abstractmethod
    async def fetch_inventory(self) -> list: ...

    @abstractmethod
    async def fetch_users(self) -> list: ...

    @abstractmethod
    async def fetch_inquiries(self) -> list: ...

    @abstractmethod
    async def fetch_orders(self) -> list: ...

    @abstractmethod
    async def fetch_discounts(self) -> list: ...

    @abstractmethod
    async def fetch_emails(self) -> list: ...

    # -------------------------------------------------------------------
    # Inventory
    # -------------------------------------------------------------------
    @abstractmethod
    async def create_inventory_item(self, item): ...

    @abstractmethod
    async def update_inventory_item(self, item): ...

    @abstractmethod
    async def delete_inventory_item(self, item_id, hard: bool = False) -> None: ...

    # -------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------
    @abstractmethod
    async def create_user(self, user, password: str | None = None): ...

    @abstractmethod
    async def update_user(self, user): ...

    @abstractmethod
    async def delete_user(self, user_id, hard: bool = False) -> None: ...

    # -------------------------------------------------------------------
    # Inquiries
    # -------------------------------------------------------------------
    @abstractmethod
    async def create_inquiry(self, inquiry): ...

    @abstractmethod
    async def update_inquiry(self, inquiry): ...

    @abstractmethod
    async def delete_inquiry(self, inquiry_id, hard: bool = False) -> None: ...

    # -------------------------------------------------------------------
    # Orders
    # -------------------------------------------------------------------
    @abstractmethod
    async def create_order(self, customer, cart, discount_percent: float | None, created_by):
        """Place an order for the cart's lines.

        The server decrements stock, applies ``discount_percent`` and computes
        the final totals; the returned Order is authoritative.
        """
        ...

    @abstractmethod
    async def update_order_status(self, order_id, status: str): ...

    @abstractmethod
    async def delete_order(self, order_id, hard: bool = False) -> None: ...

    # -------------------------------------------------------------------
    # Discounts
    # -------------------------------------------------------------------
    @abstractmethod
    async def create_discount(self, discount): ...

    @abstractmethod
    async def update_discount(self, discount): ...

    @abstractmethod
    async def delete_discount(self, discount_id, hard: bool = False) -> None: ...

    # -------------------------------------------------------------------
    # Emails
    # -------------------------------------------------------------------
    @abstractmethod
    async def send_email(self, recipient: str, subject: str, body: str):
        """Send an HTML email. Returns the stored Email record, or None if the server kept none."""
        ...

    @abstractmethod
    async def delete_email(self, email_id, hard: bool = False) -> None: ...

    # -------------------------------------------------------------------
    # Backup
    # -------------------------------------------------------------------
    @abstractmethod
    async def create_backup(self) -> BackupResult: ...

    @abstractmethod
    async def restore_backup(self, file) -> RestoreResult: ...
