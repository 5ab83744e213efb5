"""Inquiry aggregate — a customer question tracked by staff."""

from enum import Enum

from protean.fields import DateTime, Identifier, String, Text

from backoffice.domain import backoffice
from backoffice.shared.revision import revise


class InquiryStatus(Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


@backoffice.aggregate
class Inquiry:
    customer_name = String(required=True, max_length=255)
    customer_email = String(required=True, max_length=254)
    details = Text(required=True)
    status = String(choices=InquiryStatus, default=InquiryStatus.PENDING.value)
    assigned_staff_id = Identifier()
    created_at = DateTime()

    def revised(self, **changes) -> "Inquiry":
        return revise(
            self,
            ("customer_name", "customer_email", "details", "status", "assigned_staff_id", "created_at"),
            **changes,
        )
