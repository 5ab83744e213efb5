"""Mapping between backend JSON payloads and domain objects.

The backend speaks camelCase and has drifted over time (discount
conditions are stored as JSON text, order lines come back in two shapes). The
translation is kept here so neither the adapters nor the aggregates have
to know about it.
"""

import json
from datetime import datetime

from backoffice.discount.discount import Discount, DiscountCondition
from backoffice.inquiry.inquiry import Inquiry
from backoffice.inventory.item import InventoryItem
from backoffice.notification.email import Email
from backoffice.order.order import Order, OrderLine
from backoffice.user.user import User


def _parse_datetime(value):
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def _isoformat(value):
    return value.isoformat() if value else None


def _compact(payload: dict) -> dict:
    return {key: value for key, value in payload.items() if value is not None}


# ---------------------------------------------------------------------------
# Inventory
# ---------------------------------------------------------------------------
def inventory_item_from_payload(data: dict) -> InventoryItem:
    return InventoryItem(
        id=data["id"],
        name=data["name"],
        sku=data["sku"],
        quantity=int(data.get("quantity") or 0),
        threshold=int(data.get("threshold") or 0),
        price=float(data.get("price") or 0.0),
        category=data.get("category"),
        image_url=data.get("imageUrl"),
        warranty_period=data.get("warrantyPeriod"),
    )


def inventory_item_to_payload(item: InventoryItem) -> dict:
    return _compact(
        {
            "id": str(item.id),
            "name": item.name,
            "sku": item.sku,
            "quantity": item.quantity,
            "threshold": item.threshold,
            "price": item.price,
            "category": item.category,
            "imageUrl": item.image_url,
            "warrantyPeriod": item.warranty_period,
        }
    )


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------
def user_from_payload(data: dict) -> User:
    return User(
        id=data["id"],
        name=data["name"],
        email=data["email"],
        role=data["role"],
        profile_picture_url=data.get("profilePictureUrl"),
        last_activity=_parse_datetime(data.get("lastActivity")),
    )


def user_to_payload(user: User, password: str | None = None) -> dict:
    return _compact(
        {
            "id": str(user.id),
            "name": user.name,
            "email": user.email,
            "role": user.role,
            "profilePictureUrl": user.profile_picture_url,
            "password": password,
        }
    )


# ---------------------------------------------------------------------------
# Inquiries
# ---------------------------------------------------------------------------
def inquiry_from_payload(data: dict) -> Inquiry:
    return Inquiry(
        id=data["id"],
        customer_name=data["customerName"],
        customer_email=data["customerEmail"],
        details=data["inquiryDetails"],
        status=data.get("status") or "Pending",
        assigned_staff_id=data.get("assignedStaffId"),
        created_at=_parse_datetime(data.get("createdAt")),
    )


def inquiry_to_payload(inquiry: Inquiry) -> dict:
    return _compact(
        {
            "id": str(inquiry.id),
            "customerName": inquiry.customer_name,
            "customerEmail": inquiry.customer_email,
            "inquiryDetails": inquiry.details,
            "status": inquiry.status,
            "assignedStaffId": str(inquiry.assigned_staff_id) if inquiry.assigned_staff_id else None,
            "createdAt": _isoformat(inquiry.created_at),
        }
    )


# ---------------------------------------------------------------------------
# Discounts
# ---------------------------------------------------------------------------
def _condition_from_payload(data: dict) -> DiscountCondition | None:
    """Read a discount's condition.

    The backend keeps it in a JSON column, so it can arrive as an object or
    as its JSON text, keyed ``minSpend``/``minItems``. Older records carry
    ``min_spend``/``min_items`` on the discount itself.
    """
    raw = data.get("condition")
    if isinstance(raw, str):
        raw = json.loads(raw) if raw.strip() else None
    source = raw if isinstance(raw, dict) else data

    min_spend = _first_present(source, "minSpend", "min_spend")
    min_items = _first_present(source, "minItems", "min_items")
    if not min_spend and not min_items:
        return None
    return DiscountCondition(
        min_spend=float(min_spend) if min_spend else None,
        min_items=int(min_items) if min_items else None,
    )


def _first_present(data: dict, *keys):
    return next((data[key] for key in keys if data.get(key) is not None), None)


def discount_from_payload(data: dict) -> Discount:
    is_active = _first_present(data, "isActive", "is_active")
    return Discount(
        id=data["id"],
        code=data["code"],
        description=data.get("description"),
        discount_type=data["type"],
        value=float(data["value"]),
        condition=_condition_from_payload(data),
        is_active=True if is_active is None else bool(is_active),
        used_count=int(_first_present(data, "usedCount", "used_count") or 0),
        created_at=_parse_datetime(data.get("createdAt")),
    )


def discount_to_payload(discount: Discount) -> dict:
    condition = discount.condition
    return _compact(
        {
            "id": str(discount.id),
            "code": discount.code,
            "description": discount.description,
            "type": discount.discount_type,
            "value": discount.value,
            "condition": _compact(
                {
                    "minSpend": condition.min_spend if condition else None,
                    "minItems": condition.min_items if condition else None,
                }
            ),
            "isActive": discount.is_active,
        }
    )


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
def _order_line_from_payload(data: dict) -> OrderLine:
    return OrderLine(
        inventory_item_id=data.get("inventory_item_id") or data.get("itemId") or data.get("id"),
        name=data["name"],
        sku=data.get("sku"),
        quantity=int(data.get("quantity") or data.get("cartQuantity")),
        price_at_purchase=float(data.get("price_at_purchase", data.get("price", 0.0))),
    )


def order_from_payload(data: dict) -> Order:
    return Order(
        id=data["id"],
        customer_name=data["customerName"],
        customer_contact=data.get("customerContact"),
        customer_address=data.get("customerAddress"),
        customer_email=data.get("customerEmail"),
        lines=[_order_line_from_payload(line) for line in data.get("items") or []],
        subtotal=float(data.get("subtotal") or 0.0),
        discount_amount=float(data.get("discountAmount") or 0.0),
        total=float(data.get("total") or 0.0),
        status=data.get("status") or "Processing",
        created_at=_parse_datetime(data.get("createdAt")),
        created_by=data.get("createdBy"),
    )


def order_request_payload(customer, cart, discount_percent, created_by) -> dict:
    """Body of the order-creation request."""
    return {
        "customer": {
            "name": customer.name,
            "contact": customer.contact,
            "address": customer.address,
            "email": customer.email,
        },
        "cart": [
            {
                "id": line["inventory_item_id"],
                "name": line["name"],
                "sku": line["sku"],
                "category": line["category"],
                "price": line["price"],
                "cartQuantity": line["quantity"],
            }
            for line in cart.snapshot()
        ],
        "discount": discount_percent,
        "createdBy": str(created_by) if created_by else None,
    }


# ---------------------------------------------------------------------------
# Emails
# ---------------------------------------------------------------------------
def email_from_payload(data: dict) -> Email:
    return Email(
        id=data["id"],
        recipient=data["recipient"],
        subject=data["subject"],
        body=data["body"],
        sent_at=_parse_datetime(data.get("sentAt")),
        attachment_path=data.get("attachment_path"),
    )
