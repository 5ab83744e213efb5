"""Email aggregate — append-only record of an email the backend sent."""

from protean.fields import DateTime, String, Text

from backoffice.domain import backoffice


@backoffice.aggregate
class Email:
    recipient = String(required=True, max_length=2000)  # may be a comma-joined list
    subject = String(required=True, max_length=500)
    body = Text(required=True)
    sent_at = DateTime()
    attachment_path = String(max_length=500)

    @property
    def recipients(self) -> list[str]:
        return [address.strip() for address in self.recipient.split(",") if address.strip()]
