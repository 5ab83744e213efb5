"""Inquiry event handlers — feed entries for staff, status emails for customers."""

from backoffice.inquiry.events import InquiryReceived, InquiryStatusChanged
from backoffice.notification.templates import EmailKind, render
from backoffice.shared.bus import handles


class InquiryNotifier:
    def __init__(self, notifications) -> None:
        self.notifications = notifications

    @handles(InquiryReceived)
    async def on_inquiry_received(self, event: InquiryReceived) -> None:
        self.notifications.info(f"New inquiry from {event.customer_name}.")

    @handles(InquiryStatusChanged)
    async def on_inquiry_status_changed(self, event: InquiryStatusChanged) -> None:
        self.notifications.info(f'Inquiry from {event.customer_name} is now "{event.status}".')


class InquiryUpdateEmailer:
    def __init__(self, mailer) -> None:
        self.mailer = mailer

    @handles(InquiryStatusChanged)
    async def on_inquiry_status_changed(self, event: InquiryStatusChanged) -> None:
        email = render(
            EmailKind.INQUIRY_UPDATE,
            {"customer_name": event.customer_name, "details": event.details, "status": event.status},
        )
        await self.mailer.send(event.customer_email, email["subject"], email["body"])
