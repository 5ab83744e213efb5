"""Back-office engine — the facade the presentation layer talks to.

One Backoffice instance serves one staff session at a time. It owns the
state store, the event bus and the two session timers, wires the domain
event handlers, and exposes:

- ``snapshot()``: a read-only view of everything the screens render;
- intent coroutines (login, checkout, cart edits, per-entity services)
  that return a success signal instead of raising;
- the notification feed.

Everything runs on one asyncio event loop and inside the back-office
domain context.
"""

import structlog

from backoffice.config import BackofficeSettings
from backoffice.discount.management import DiscountService
from backoffice.discount.selector import discount_amount, select_best_discount
from backoffice.gateway import build_gateway
from backoffice.gateway.port import GatewayError
from backoffice.inquiry.handlers import InquiryNotifier, InquiryUpdateEmailer
from backoffice.inquiry.management import InquiryService
from backoffice.inventory.management import InventoryService
from backoffice.inventory.watcher import LowStockEmailer, LowStockNotifier, LowStockWatcher
from backoffice.notification.mailer import Mailer
from backoffice.notification.management import EmailService
from backoffice.order.checkout import CheckoutOrchestrator
from backoffice.order.handlers import OrderStatusNotifier, ReceiptEmailer
from backoffice.order.management import OrderService
from backoffice.session.auth import AuthSession
from backoffice.session.backup import BackupService
from backoffice.session.pollers import ActivityHeartbeat, SessionLivenessPoller
from backoffice.session.store import StateStore
from backoffice.session.sync import DataSync
from backoffice.shared.bus import EventBus
from backoffice.user.management import UserService
from backoffice.utils.logging import bind_session, clear_session

logger = structlog.get_logger(__name__)


class Backoffice:
    def __init__(self, gateway, settings: BackofficeSettings | None = None, store=None, bus=None) -> None:
        self.settings = settings or BackofficeSettings()
        self.gateway = gateway
        self.store = store or StateStore()
        self.bus = bus or EventBus()
        self.auth = AuthSession()

        self.mailer = Mailer(gateway, self.store)
        self.sync = DataSync(gateway, self.store, self.bus)
        self.inventory = InventoryService(gateway, self.store, self.bus)
        self.users = UserService(gateway, self.store, self.bus)
        self.inquiries = InquiryService(gateway, self.store, self.bus)
        self.orders = OrderService(gateway, self.store, self.bus)
        self.discounts = DiscountService(gateway, self.store, self.bus)
        self.emails = EmailService(gateway, self.store, self.bus, self.mailer)
        self.backups = BackupService(gateway, self.store, self.bus, self.sync)
        self.checkout_orchestrator = CheckoutOrchestrator(gateway, self.store, self.bus, self.sync)

        self.liveness = SessionLivenessPoller(
            self.auth,
            self.store.notifications,
            self.logout,
            interval=self.settings.liveness_interval,
            grace=self.settings.logout_grace,
        )
        self.heartbeat = ActivityHeartbeat(gateway, interval=self.settings.activity_interval)

        self._register_handlers()

    @classmethod
    def from_settings(cls, settings: BackofficeSettings | None = None) -> "Backoffice":
        settings = settings or BackofficeSettings.from_env()
        return cls(build_gateway(settings), settings)

    def _register_handlers(self) -> None:
        notifications = self.store.notifications
        for handler in (
            LowStockWatcher(self.bus),
            LowStockNotifier(notifications),
            LowStockEmailer(self.store, self.mailer),
            ReceiptEmailer(self.mailer),
            OrderStatusNotifier(notifications),
            InquiryNotifier(notifications),
            InquiryUpdateEmailer(self.mailer),
        ):
            self.bus.register(handler)

    # -------------------------------------------------------------------
    # Session lifecycle
    # -------------------------------------------------------------------
    @property
    def current_user(self):
        return self.auth.user

    async def login(self, email: str, password: str) -> bool:
        try:
            user, token = await self.gateway.login(email, password)
        except GatewayError as exc:
            logger.warning("Login failed", email=email, error=exc.message, status_code=exc.status_code)
            self.store.notifications.error(f"Login failed: {exc.message}")
            return False

        self.store.clear()
        self.auth.sign_in(user, token)
        bind_session(str(user.id), role=user.role)
        logger.info("Logged in", email=email)

        await self.sync.refresh()
        self.liveness.start()
        self.heartbeat.start()
        return True

    async def logout(self) -> None:
        """End the session: stop the timers, tell the backend, drop all local state."""
        if not self.auth.is_authenticated:
            return

        user_id = self.auth.user_id
        await self.liveness.stop()
        await self.heartbeat.stop()

        try:
            await self.gateway.logout()
        except GatewayError as exc:
            logger.warning("Remote logout failed", error=exc.message)

        self.store.clear()
        self.auth.clear()
        logger.info("Logged out", user_id=user_id)
        clear_session()

    def force_logout_user(self, user_id) -> None:
        """Invalidate a user's session; their liveness poll will sign them out."""
        self.auth.force_logout_user(user_id)

    async def close(self) -> None:
        await self.logout()
        await self.gateway.aclose()

    async def refresh(self) -> bool:
        return await self.sync.refresh()

    # -------------------------------------------------------------------
    # Cart
    # -------------------------------------------------------------------
    def add_to_cart(self, item_id, quantity: int = 1) -> bool:
        item = self.store.find("inventory", item_id)
        if item is None:
            return False
        return self.store.cart.add_item(item, quantity)

    def update_cart_quantity(self, item_id, quantity: int) -> bool:
        item = self.store.find("inventory", item_id)
        return self.store.cart.update_quantity(item_id, quantity, item.quantity if item else None)

    def remove_from_cart(self, item_id) -> None:
        self.store.cart.remove(item_id)

    def clear_cart(self) -> None:
        self.store.cart.clear()

    def best_discount(self):
        cart = self.store.cart
        return select_best_discount(self.store.active_discounts, cart.subtotal, cart.total_items)

    def discount_preview(self) -> tuple:
        """The discount checkout would apply right now, and what it takes off."""
        discount = self.best_discount()
        return discount, discount_amount(discount, self.store.cart.subtotal)

    async def checkout(self, customer: dict):
        return await self.checkout_orchestrator.checkout(customer, acting_user=self.auth.user)

    # -------------------------------------------------------------------
    # Backup
    # -------------------------------------------------------------------
    async def create_backup(self):
        return await self.backups.create_backup()

    async def restore_backup(self, file) -> bool:
        return await self.backups.restore_backup(file)

    def update_backup_settings(self, **changes) -> bool:
        return self.backups.update_backup_settings(**changes)

    # -------------------------------------------------------------------
    # Read side
    # -------------------------------------------------------------------
    def snapshot(self):
        return self.store.snapshot(user=self.auth.user)

    @property
    def notifications(self):
        return self.store.notifications.entries

    @property
    def unread_count(self) -> int:
        return self.store.notifications.unread_count

    def mark_notifications_read(self) -> None:
        self.store.notifications.mark_all_read()
