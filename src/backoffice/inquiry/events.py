"""Domain events for the Inquiry aggregate."""

from protean.fields import Identifier, String, Text

from backoffice.domain import backoffice


@backoffice.event(part_of="Inquiry")
class InquiryReceived:
    __version__ = 1

    inquiry_id = Identifier(required=True)
    customer_name = String(required=True)


@backoffice.event(part_of="Inquiry")
class InquiryStatusChanged:
    """Staff changed an inquiry; the customer is told about the new status."""

    __version__ = 1

    inquiry_id = Identifier(required=True)
    customer_name = String(required=True)
    customer_email = String(required=True)
    details = Text()
    status = String(required=True)
