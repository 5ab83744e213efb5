"""Outbound email through the gateway, recorded in the session's email log."""

import structlog

from backoffice.gateway.port import GatewayError

logger = structlog.get_logger(__name__)


class Mailer:
    def __init__(self, gateway, store) -> None:
        self.gateway = gateway
        self.store = store

    async def send(self, recipient: str, subject: str, body: str) -> bool:
        """Send one email. A failure becomes an error notification and returns False."""
        ticket = self.store.begin("emails")
        try:
            record = await self.gateway.send_email(recipient, subject, body)
            if record is None:
                emails = await self.gateway.fetch_emails()
        except GatewayError as exc:
            logger.error("Email send failed", recipient=recipient, subject=subject, error=exc.message)
            self.store.notifications.error("Error: Could not send email.")
            return False

        logger.info("Email sent", recipient=recipient, subject=subject)
        if not self.store.is_same_session(ticket):
            return True

        if record is None:
            self.store.reconcile("emails", emails, ticket)
        else:
            self.store.prepend("emails", record)
        return True
