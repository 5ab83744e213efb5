"""Inquiry update template — tells a customer their inquiry changed status."""

from html import escape

from backoffice.notification.templates.layout import render_email_html


class InquiryUpdateTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        customer_name = context.get("customer_name", "Customer")
        details = context.get("details") or ""
        status = context.get("status", "N/A")

        subject = "Update on your Insophinia Inquiry"
        content = (
            f"<p>Hello {escape(customer_name)},</p>"
            f'<p>This is an update regarding your inquiry: "<em>{escape(details)}</em>".</p>'
            f"<p>The status has been changed to: <strong>{escape(status)}</strong>.</p>"
            "<p>Thank you,<br>Insophinia Support Team</p>"
        )
        return {"subject": subject, "body": render_email_html(subject, content)}
