"""Staff-sent emails and the email log."""

import structlog

from backoffice.gateway.port import GatewayError
from backoffice.shared.service import MutationService

logger = structlog.get_logger(__name__)


class EmailService(MutationService):
    def __init__(self, gateway, store, bus, mailer) -> None:
        super().__init__(gateway, store, bus)
        self.mailer = mailer

    async def send(self, recipient: str, subject: str, body: str) -> bool:
        if not recipient or not subject:
            self.notifications.error("Error: Could not send email. A recipient and subject are required.")
            return False
        return await self.mailer.send(recipient, subject, body)

    async def delete(self, email_id, hard: bool = False) -> bool:
        ticket = self.store.begin(f"emails:{email_id}")
        try:
            await self.gateway.delete_email(email_id, hard=hard)
        except GatewayError as exc:
            self.report_failure("delete email", exc, email_id=str(email_id), hard=hard)
            return False

        if not self.store.is_current(ticket):
            return False
        self.store.remove("emails", email_id)
        logger.info("Email deleted", email_id=str(email_id), hard=hard)
        return True
