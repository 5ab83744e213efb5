"""Server-side backup and restore of all back-office data."""

from datetime import UTC, datetime

import structlog

from backoffice.gateway.port import GatewayError
from backoffice.shared.service import MutationService

logger = structlog.get_logger(__name__)


class BackupService(MutationService):
    def __init__(self, gateway, store, bus, sync) -> None:
        super().__init__(gateway, store, bus)
        self.sync = sync

    async def create_backup(self):
        """Ask the backend for a backup. Returns the BackupResult, or None on failure."""
        ticket = self.store.begin("backup")
        try:
            result = await self.gateway.create_backup()
        except GatewayError as exc:
            self.report_failure("create backup", exc)
            return None

        logger.info("Backup created", file=result.file)
        if self.store.is_same_session(ticket):
            self.store.backup_settings = self.store.backup_settings.updated(last_backup_at=datetime.now(UTC))
            self.notifications.info(result.message)
        return result

    def update_backup_settings(self, **changes) -> bool:
        try:
            self.store.backup_settings = self.store.backup_settings.updated(**changes)
        except (TypeError, ValueError) as exc:
            self.report_invalid("update backup settings", exc)
            return False
        return True

    async def restore_backup(self, file) -> bool:
        """Replace all server data with a backup, then reload the session.

        A failed restore leaves local state and the session untouched.
        """
        ticket = self.store.begin("restore")
        try:
            result = await self.gateway.restore_backup(file)
        except GatewayError as exc:
            logger.error("Restore failed", file=str(file), error=exc.message)
            self.notifications.error(f"Data restore failed: {exc.message}")
            return False

        if not result.success:
            logger.error("Restore rejected", file=str(file), error=result.message)
            self.notifications.error(f"Data restore failed: {result.message}")
            return False

        if not self.store.is_current(ticket):
            return False

        logger.info("Restore completed", file=str(file))
        await self.sync.refresh()
        self.store.cart.clear()
        self.notifications.info(result.message)
        return True
