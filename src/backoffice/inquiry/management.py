"""Customer inquiry mutations."""

from datetime import UTC, datetime

import structlog
from protean.exceptions import ValidationError

from backoffice.gateway.port import GatewayError
from backoffice.inquiry.events import InquiryReceived, InquiryStatusChanged
from backoffice.inquiry.inquiry import Inquiry, InquiryStatus
from backoffice.shared.service import MutationService

logger = structlog.get_logger(__name__)


class InquiryService(MutationService):
    async def add(self, customer_name, customer_email, details, **fields) -> bool:
        try:
            inquiry = Inquiry(
                customer_name=customer_name,
                customer_email=customer_email,
                details=details,
                created_at=datetime.now(UTC),
                **fields,
            )
        except ValidationError as exc:
            self.report_invalid("add inquiry", exc)
            return False

        ticket = self.store.begin("inquiries")
        try:
            created = await self.gateway.create_inquiry(inquiry)
        except GatewayError as exc:
            self.report_failure("add inquiry", exc, customer_email=customer_email)
            return False

        if not self.store.is_same_session(ticket):
            return False
        self.store.prepend("inquiries", created)
        await self.bus.publish(InquiryReceived(inquiry_id=created.id, customer_name=created.customer_name))
        return True

    async def update(self, inquiry_id, **changes) -> bool:
        """Edit an inquiry. A status change also emails the customer."""
        existing = self.store.find("inquiries", inquiry_id)
        if existing is None:
            logger.warning("Update for unknown inquiry", inquiry_id=str(inquiry_id))
            return False

        try:
            if "status" in changes:
                changes["status"] = InquiryStatus(changes["status"]).value
            revised = existing.revised(**changes)
        except (ValidationError, ValueError) as exc:
            self.report_invalid("update inquiry", exc, inquiry_id=str(inquiry_id))
            return False

        ticket = self.store.begin(f"inquiries:{inquiry_id}")
        try:
            updated = await self.gateway.update_inquiry(revised)
        except GatewayError as exc:
            self.report_failure("update inquiry", exc, inquiry_id=str(inquiry_id))
            return False

        if not self.store.is_current(ticket):
            return False
        self.store.replace("inquiries", updated)

        if updated.status != existing.status:
            await self.bus.publish(
                InquiryStatusChanged(
                    inquiry_id=updated.id,
                    customer_name=updated.customer_name,
                    customer_email=updated.customer_email,
                    details=updated.details,
                    status=updated.status,
                )
            )
        return True

    async def update_status(self, inquiry_id, status) -> bool:
        return await self.update(inquiry_id, status=status)

    async def delete(self, inquiry_id, hard: bool = False) -> bool:
        ticket = self.store.begin(f"inquiries:{inquiry_id}")
        try:
            await self.gateway.delete_inquiry(inquiry_id, hard=hard)
        except GatewayError as exc:
            self.report_failure("delete inquiry", exc, inquiry_id=str(inquiry_id), hard=hard)
            return False

        if not self.store.is_current(ticket):
            return False
        self.store.remove("inquiries", inquiry_id)
        return True
