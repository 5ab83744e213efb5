"""Full reload of the session state from the backend."""

import asyncio

import structlog

from backoffice.gateway.port import GatewayError
from backoffice.session.store import COLLECTIONS
from backoffice.shared.service import MutationService

logger = structlog.get_logger(__name__)

LOAD_FAILED_MESSAGE = "Error: Could not load data from the server."


def reload_key(collection: str) -> str:
    return f"reload:{collection}"


class DataSync(MutationService):
    async def refresh(self) -> bool:
        """Fetch every collection concurrently and merge them into the local copies.

        All or nothing: if any fetch fails the state is left as it was. A
        collection whose reload was superseded by a newer one is skipped.
        """
        tickets = [self.store.begin(reload_key(name)) for name in COLLECTIONS]
        try:
            results = await asyncio.gather(
                self.gateway.fetch_inventory(),
                self.gateway.fetch_users(),
                self.gateway.fetch_inquiries(),
                self.gateway.fetch_orders(),
                self.gateway.fetch_discounts(),
                self.gateway.fetch_emails(),
            )
        except GatewayError as exc:
            logger.error("Data load failed", error=exc.message, status_code=exc.status_code)
            self.notifications.error(LOAD_FAILED_MESSAGE)
            return False

        if not self.store.is_same_session(tickets[0]):
            return False

        for name, ticket, entities in zip(COLLECTIONS, tickets, results):
            if self.store.is_current(ticket):
                self.store.reconcile(name, entities, ticket)

        logger.info(
            "Session data loaded",
            inventory=len(self.store.inventory),
            orders=len(self.store.orders),
            discounts=len(self.store.discounts),
        )
        return True

    async def refresh_inventory(self) -> bool:
        ticket = self.store.begin(reload_key("inventory"))
        try:
            inventory = await self.gateway.fetch_inventory()
        except GatewayError as exc:
            self.report_failure("refresh inventory", exc)
            return False

        if not self.store.is_current(ticket):
            return False
        self.store.reconcile("inventory", inventory, ticket)
        return True
