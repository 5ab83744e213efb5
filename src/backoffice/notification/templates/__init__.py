"""Template registry — maps email kinds to template classes.

Each template renders a ``{"subject", "body"}`` dict from plain context
data, so handlers never build HTML themselves.
"""

from enum import Enum

from backoffice.notification.templates.inquiry_update import InquiryUpdateTemplate
from backoffice.notification.templates.low_stock_alert import LowStockAlertTemplate
from backoffice.notification.templates.order_receipt import OrderReceiptTemplate


class EmailKind(Enum):
    LOW_STOCK_ALERT = "LowStockAlert"
    ORDER_RECEIPT = "OrderReceipt"
    INQUIRY_UPDATE = "InquiryUpdate"


TEMPLATE_REGISTRY: dict[str, type] = {
    EmailKind.LOW_STOCK_ALERT.value: LowStockAlertTemplate,
    EmailKind.ORDER_RECEIPT.value: OrderReceiptTemplate,
    EmailKind.INQUIRY_UPDATE.value: InquiryUpdateTemplate,
}


def get_template(kind: str):
    """Look up a template class by email kind string."""
    template_cls = TEMPLATE_REGISTRY.get(kind)
    if template_cls is None:
        raise ValueError(f"No template registered for email kind: {kind}")
    return template_cls


def render(kind: EmailKind, context: dict) -> dict:
    return get_template(kind.value).render(context)
