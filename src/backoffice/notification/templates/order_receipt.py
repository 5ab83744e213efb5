"""Order receipt template — sent to the customer after a successful checkout."""

from html import escape

from backoffice.notification.templates.layout import render_email_html


def _money(amount) -> str:
    return f"${float(amount or 0):,.2f}"


class OrderReceiptTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        customer_name = context.get("customer_name", "Customer")
        lines = context.get("lines", [])

        rows = "".join(
            "<tr>"
            f"<td>{escape(str(line.get('name', '')))}</td>"
            f"<td>{line.get('quantity', 0)}</td>"
            f"<td>{_money(line.get('price', 0))}</td>"
            f"<td>{_money(line.get('price', 0) * line.get('quantity', 0))}</td>"
            "</tr>"
            for line in lines
        )

        subject = f"Your receipt for order #{order_id}"
        content = (
            f"<p>Hello {escape(customer_name)},</p>"
            "<p>Thank you for your order. Here is your receipt:</p>"
            '<table width="100%"><thead><tr><th>Item</th><th>Qty</th><th>Price</th><th>Total</th></tr></thead>'
            f"<tbody>{rows}</tbody></table>"
            f"<p>Subtotal: {_money(context.get('subtotal'))}<br>"
            f"Discount: -{_money(context.get('discount_amount'))}<br>"
            f"<strong>Total: {_money(context.get('total'))}</strong></p>"
        )
        return {"subject": subject, "body": render_email_html(subject, content)}
