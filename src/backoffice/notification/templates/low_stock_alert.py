"""Low stock alert template — internal email to store managers."""

from html import escape

from backoffice.notification.templates.layout import render_email_html


class LowStockAlertTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        name = context.get("name", "N/A")
        sku = context.get("sku", "N/A")
        quantity = context.get("quantity", 0)
        threshold = context.get("threshold", 0)

        subject = f"Low Stock Alert: {name}"
        content = (
            f'<p>This is an automated notification. The stock for "<strong>{escape(name)}</strong>" '
            f"(SKU: {escape(sku)}) has fallen to <strong>{quantity}</strong>, which is at or below "
            f"the threshold of {threshold}.</p>"
            "<p>Please take appropriate action to restock this item.</p>"
        )
        return {"subject": subject, "body": render_email_html(subject, content)}
