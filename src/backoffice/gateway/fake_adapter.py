"""Configurable in-memory backend for development and testing.

FakeGateway keeps its own copy of every collection as backend-shaped
payloads and answers calls the way the real server does: soft deletes hide
records from fetches, order creation checks and decrements stock, and
every read hands back freshly built domain objects so callers never share
instances with the "server".

It can be configured at runtime to fail, either every call or only the
named methods, which is how tests exercise the engine's error paths.
"""

import copy
import secrets
from datetime import UTC, datetime
from uuid import uuid4

from backoffice.gateway import payloads
from backoffice.gateway.port import BackupResult, GatewayError, RemoteDataGateway, RestoreResult


class FakeGateway(RemoteDataGateway):
    """Configurable fake back-office backend."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Server unavailable"
        self.failing_methods: set[str] | None = None
        self.calls: list[dict] = []
        self.current_user_id: str | None = None

        self._passwords: dict[str, str] = {}
        self._collections: dict[str, dict[str, dict]] = {
            "inventory": {},
            "users": {},
            "inquiries": {},
            "orders": {},
            "discounts": {},
            "emails": {},
        }
        self._backups: dict[str, dict] = {}

    # -------------------------------------------------------------------
    # Test controls
    # -------------------------------------------------------------------
    def configure(self, should_succeed: bool, failure_reason: str = "Server unavailable", methods=None) -> None:
        """Configure gateway behaviour at runtime.

        With ``methods`` given, only those gateway methods fail; everything
        else keeps working.
        """
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.failing_methods = set(methods) if methods else None

    def calls_to(self, method: str) -> list[dict]:
        return [call for call in self.calls if call["method"] == method]

    def seed_user(self, user, password: str) -> None:
        self._collections["users"][str(user.id)] = payloads.user_to_payload(user)
        self._passwords[user.email] = password

    def seed_inventory(self, *items) -> None:
        for item in items:
            self._collections["inventory"][str(item.id)] = payloads.inventory_item_to_payload(item)

    def seed_discounts(self, *discounts) -> None:
        for discount in discounts:
            self._collections["discounts"][str(discount.id)] = payloads.discount_to_payload(discount)

    def seed_inquiries(self, *inquiries) -> None:
        for inquiry in inquiries:
            self._collections["inquiries"][str(inquiry.id)] = payloads.inquiry_to_payload(inquiry)

    def stock_of(self, item_id) -> int:
        return self._collections["inventory"][str(item_id)]["quantity"]

    def set_stock(self, item_id, quantity: int) -> None:
        self._collections["inventory"][str(item_id)]["quantity"] = quantity

    # -------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------
    def _record(self, method: str, **kwargs) -> None:
        self.calls.append({"method": method, **kwargs})
        if self.should_succeed:
            return
        if self.failing_methods is None or method in self.failing_methods:
            raise GatewayError(self.failure_reason, status_code=500)

    def _live(self, collection: str) -> list[dict]:
        return [record for record in self._collections[collection].values() if not record.get("isDeleted")]

    def _get(self, collection: str, record_id) -> dict:
        record = self._collections[collection].get(str(record_id))
        if record is None or record.get("isDeleted"):
            raise GatewayError(f"{collection.rstrip('s').capitalize()} not found", status_code=404)
        return record

    def _store(self, collection: str, payload: dict) -> dict:
        payload = dict(payload)
        payload.setdefault("id", str(uuid4()))
        self._collections[collection][payload["id"]] = payload
        return payload

    def _update(self, collection: str, payload: dict) -> dict:
        record = self._get(collection, payload["id"])
        record.update(payload)
        return record

    def _delete(self, collection: str, record_id, hard: bool) -> None:
        self._get(collection, record_id)
        if hard:
            del self._collections[collection][str(record_id)]
        else:
            self._collections[collection][str(record_id)]["isDeleted"] = True

    # -------------------------------------------------------------------
    # Session
    # -------------------------------------------------------------------
    async def login(self, email, password):
        self._record("login", email=email)
        if self._passwords.get(email) != password:
            raise GatewayError("Invalid credentials", status_code=401)

        record = next(record for record in self._live("users") if record["email"] == email)
        self.current_user_id = record["id"]
        return payloads.user_from_payload(record), f"fake_token_{secrets.token_hex(8)}"

    async def logout(self):
        self._record("logout")
        self.current_user_id = None

    async def update_activity(self):
        self._record("update_activity")
        if self.current_user_id in self._collections["users"]:
            self._collections["users"][self.current_user_id]["lastActivity"] = datetime.now(UTC).isoformat()

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    async def fetch_inventory(self):
        self._record("fetch_inventory")
        return [payloads.inventory_item_from_payload(record) for record in self._live("inventory")]

    async def fetch_users(self):
        self._record("fetch_users")
        return [payloads.user_from_payload(record) for record in self._live("users")]

    async def fetch_inquiries(self):
        self._record("fetch_inquiries")
        return [payloads.inquiry_from_payload(record) for record in self._live("inquiries")]

    async def fetch_orders(self):
        self._record("fetch_orders")
        records = sorted(self._live("orders"), key=lambda record: record["createdAt"], reverse=True)
        return [payloads.order_from_payload(record) for record in records]

    async def fetch_discounts(self):
        self._record("fetch_discounts")
        return [payloads.discount_from_payload(record) for record in self._live("discounts")]

    async def fetch_emails(self):
        self._record("fetch_emails")
        return [payloads.email_from_payload(record) for record in self._live("emails")]

    # -------------------------------------------------------------------
    # Inventory
    # -------------------------------------------------------------------
    async def create_inventory_item(self, item):
        self._record("create_inventory_item", sku=item.sku)
        if any(record["sku"] == item.sku for record in self._live("inventory")):
            raise GatewayError(f"SKU {item.sku} already exists", status_code=409)
        record = self._store("inventory", payloads.inventory_item_to_payload(item))
        return payloads.inventory_item_from_payload(record)

    async def update_inventory_item(self, item):
        self._record("update_inventory_item", item_id=str(item.id), quantity=item.quantity)
        record = self._update("inventory", payloads.inventory_item_to_payload(item))
        return payloads.inventory_item_from_payload(record)

    async def delete_inventory_item(self, item_id, hard=False):
        self._record("delete_inventory_item", item_id=str(item_id), hard=hard)
        self._delete("inventory", item_id, hard)

    # -------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------
    async def create_user(self, user, password=None):
        self._record("create_user", email=user.email)
        record = self._store("users", payloads.user_to_payload(user))
        if password:
            self._passwords[user.email] = password
        return payloads.user_from_payload(record)

    async def update_user(self, user):
        self._record("update_user", user_id=str(user.id))
        record = self._update("users", payloads.user_to_payload(user))
        return payloads.user_from_payload(record)

    async def delete_user(self, user_id, hard=False):
        self._record("delete_user", user_id=str(user_id), hard=hard)
        self._delete("users", user_id, hard)

    # -------------------------------------------------------------------
    # Inquiries
    # -------------------------------------------------------------------
    async def create_inquiry(self, inquiry):
        self._record("create_inquiry", customer_email=inquiry.customer_email)
        payload = payloads.inquiry_to_payload(inquiry)
        payload.setdefault("createdAt", datetime.now(UTC).isoformat())
        record = self._store("inquiries", payload)
        return payloads.inquiry_from_payload(record)

    async def update_inquiry(self, inquiry):
        self._record("update_inquiry", inquiry_id=str(inquiry.id), status=inquiry.status)
        record = self._update("inquiries", payloads.inquiry_to_payload(inquiry))
        return payloads.inquiry_from_payload(record)

    async def delete_inquiry(self, inquiry_id, hard=False):
        self._record("delete_inquiry", inquiry_id=str(inquiry_id), hard=hard)
        self._delete("inquiries", inquiry_id, hard)

    # -------------------------------------------------------------------
    # Orders
    # -------------------------------------------------------------------
    async def create_order(self, customer, cart, discount_percent, created_by):
        request = payloads.order_request_payload(customer, cart, discount_percent, created_by)
        self._record("create_order", request=request)

        for line in request["cart"]:
            stock = self._collections["inventory"].get(line["id"])
            if stock is None or stock.get("isDeleted") or stock["quantity"] < line["cartQuantity"]:
                raise GatewayError(f"Insufficient stock for {line['name']}.", status_code=400)

        subtotal = sum(line["price"] * line["cartQuantity"] for line in request["cart"])
        discount = (subtotal * discount_percent) / 100 if discount_percent else 0.0

        for line in request["cart"]:
            self._collections["inventory"][line["id"]]["quantity"] -= line["cartQuantity"]

        record = self._store(
            "orders",
            {
                "customerName": customer.name,
                "customerContact": customer.contact,
                "customerAddress": customer.address,
                "customerEmail": customer.email,
                "items": request["cart"],
                "subtotal": subtotal,
                "discountAmount": discount,
                "total": subtotal - discount,
                "createdAt": datetime.now(UTC).isoformat(),
                "createdBy": request["createdBy"],
                "status": "Processing",
            },
        )
        return payloads.order_from_payload(record)

    async def update_order_status(self, order_id, status):
        self._record("update_order_status", order_id=str(order_id), status=status)
        record = self._update("orders", {"id": str(order_id), "status": status})
        return payloads.order_from_payload(record)

    async def delete_order(self, order_id, hard=False):
        self._record("delete_order", order_id=str(order_id), hard=hard)
        self._delete("orders", order_id, hard)

    # -------------------------------------------------------------------
    # Discounts
    # -------------------------------------------------------------------
    async def create_discount(self, discount):
        self._record("create_discount", code=discount.code)
        if any(record["code"] == discount.code for record in self._live("discounts")):
            raise GatewayError(f"Discount code {discount.code} already exists", status_code=409)
        payload = payloads.discount_to_payload(discount)
        payload.update({"usedCount": 0, "createdAt": datetime.now(UTC).isoformat()})
        record = self._store("discounts", payload)
        return payloads.discount_from_payload(record)

    async def update_discount(self, discount):
        self._record("update_discount", discount_id=str(discount.id))
        record = self._update("discounts", payloads.discount_to_payload(discount))
        return payloads.discount_from_payload(record)

    async def delete_discount(self, discount_id, hard=False):
        self._record("delete_discount", discount_id=str(discount_id), hard=hard)
        self._delete("discounts", discount_id, hard)

    # -------------------------------------------------------------------
    # Emails
    # -------------------------------------------------------------------
    async def send_email(self, recipient, subject, body):
        self._record("send_email", recipient=recipient, subject=subject)
        record = self._store(
            "emails",
            {
                "recipient": recipient,
                "subject": subject,
                "body": body,
                "sentAt": datetime.now(UTC).isoformat(),
            },
        )
        return payloads.email_from_payload(record)

    async def delete_email(self, email_id, hard=False):
        self._record("delete_email", email_id=str(email_id), hard=hard)
        self._delete("emails", email_id, hard)

    # -------------------------------------------------------------------
    # Backup
    # -------------------------------------------------------------------
    async def create_backup(self):
        self._record("create_backup")
        file = f"backup-{datetime.now(UTC).strftime('%Y%m%d%H%M%S%f')}.json"
        self._backups[file] = copy.deepcopy(self._collections)
        return BackupResult(message=f"Backup created successfully: {file}", file=file)

    async def restore_backup(self, file):
        self._record("restore_backup", file=str(file))
        snapshot = self._backups.get(str(file))
        if snapshot is None:
            return RestoreResult(success=False, message=f"Backup file {file} is not a valid backup")
        self._collections = copy.deepcopy(snapshot)
        return RestoreResult(success=True, message="Data restored successfully")
