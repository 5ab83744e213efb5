"""REST gateway over the back-office HTTP API.

Thin adapter: one request per call, no retries. Every route lives under
``{base_url}/api``; once logged in the bearer token is sent with each
request. Error responses carry a JSON ``message`` that becomes the
GatewayError message.

Records that cannot be mapped onto the domain (missing fields, values the
aggregates reject) never escape as anything but GatewayError: a bad record
in a listing is skipped and logged, a bad single-record response fails the
call.
"""

from pathlib import Path

import httpx
import structlog
from protean.exceptions import ValidationError

from backoffice.gateway import payloads
from backoffice.gateway.port import BackupResult, GatewayError, RemoteDataGateway, RestoreResult

logger = structlog.get_logger(__name__)

MALFORMED_RESPONSE = "Malformed server response"

# What mapping a backend record can raise
_MAPPING_ERRORS = (ValidationError, KeyError, TypeError, ValueError)


def _server_message(response: httpx.Response) -> str:
    """The ``message`` field of an error body, or an empty string."""
    try:
        body = response.json()
    except ValueError:
        return ""
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return ""


def _decode(mapper, record):
    try:
        return mapper(record)
    except _MAPPING_ERRORS as exc:
        logger.warning("Malformed record from backend", mapper=mapper.__name__, error=str(exc))
        raise GatewayError(MALFORMED_RESPONSE, server_message="") from exc


def _decode_all(mapper, records) -> list:
    if not isinstance(records, list):
        logger.warning("Expected a list from backend", mapper=mapper.__name__, got=type(records).__name__)
        raise GatewayError(MALFORMED_RESPONSE, server_message="")

    decoded = []
    for record in records:
        try:
            decoded.append(mapper(record))
        except _MAPPING_ERRORS as exc:
            record_id = record.get("id") if isinstance(record, dict) else None
            logger.warning("Skipping malformed record", mapper=mapper.__name__, record_id=record_id, error=str(exc))
    return decoded


class RestGateway(RemoteDataGateway):
    """Back-office backend reached over HTTP."""

    def __init__(self, base_url: str, timeout: float = 10.0, transport: httpx.AsyncBaseTransport | None = None):
        self.base_url = base_url.rstrip("/")
        self.token: str | None = None
        self._client = httpx.AsyncClient(
            base_url=f"{self.base_url}/api",
            timeout=httpx.Timeout(timeout, connect=min(3.0, timeout)),
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs):
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            response = await self._client.request(method, path, headers=headers, **kwargs)
        except httpx.TimeoutException as exc:
            logger.warning("Backend request timed out", method=method, path=path)
            raise GatewayError("The server took too long to respond", server_message="") from exc
        except httpx.RequestError as exc:
            logger.warning("Backend request failed", method=method, path=path, error=str(exc))
            raise GatewayError("Could not reach the server", server_message="") from exc

        if response.is_error:
            server_message = _server_message(response)
            message = server_message or response.reason_phrase or f"HTTP {response.status_code}"
            logger.warning(
                "Backend returned an error",
                method=method,
                path=path,
                status_code=response.status_code,
                error=message,
            )
            raise GatewayError(message, status_code=response.status_code, server_message=server_message)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            logger.warning("Backend returned invalid JSON", method=method, path=path)
            raise GatewayError(MALFORMED_RESPONSE, server_message="") from exc

    @staticmethod
    def _hard(hard: bool) -> dict:
        return {"hard": "true"} if hard else {}

    # -------------------------------------------------------------------
    # Session
    # -------------------------------------------------------------------
    async def login(self, email, password):
        body = await self._request("POST", "/auth/login", json={"email": email, "password": password})
        if not isinstance(body, dict) or not body.get("token"):
            raise GatewayError(MALFORMED_RESPONSE, server_message="")
        user = _decode(payloads.user_from_payload, body.get("user"))
        self.token = body["token"]
        return user, self.token

    async def logout(self):
        try:
            await self._request("POST", "/auth/logout")
        finally:
            self.token = None

    async def update_activity(self):
        await self._request("POST", "/users/activity")

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    async def fetch_inventory(self):
        return _decode_all(payloads.inventory_item_from_payload, await self._request("GET", "/inventory"))

    async def fetch_users(self):
        return _decode_all(payloads.user_from_payload, await self._request("GET", "/users"))

    async def fetch_inquiries(self):
        return _decode_all(payloads.inquiry_from_payload, await self._request("GET", "/inquiries"))

    async def fetch_orders(self):
        return _decode_all(payloads.order_from_payload, await self._request("GET", "/orders"))

    async def fetch_discounts(self):
        return _decode_all(payloads.discount_from_payload, await self._request("GET", "/discounts"))

    async def fetch_emails(self):
        return _decode_all(payloads.email_from_payload, await self._request("GET", "/emails"))

    # -------------------------------------------------------------------
    # Inventory
    # -------------------------------------------------------------------
    async def create_inventory_item(self, item):
        body = await self._request("POST", "/inventory", json=payloads.inventory_item_to_payload(item))
        return _decode(payloads.inventory_item_from_payload, body)

    async def update_inventory_item(self, item):
        body = await self._request("PUT", f"/inventory/{item.id}", json=payloads.inventory_item_to_payload(item))
        return _decode(payloads.inventory_item_from_payload, body)

    async def delete_inventory_item(self, item_id, hard=False):
        await self._request("DELETE", f"/inventory/{item_id}", params=self._hard(hard))

    # -------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------
    async def create_user(self, user, password=None):
        body = await self._request("POST", "/users", json=payloads.user_to_payload(user, password))
        return _decode(payloads.user_from_payload, body)

    async def update_user(self, user):
        body = await self._request("PUT", f"/users/{user.id}", json=payloads.user_to_payload(user))
        return _decode(payloads.user_from_payload, body)

    async def delete_user(self, user_id, hard=False):
        await self._request("DELETE", f"/users/{user_id}", params=self._hard(hard))

    # -------------------------------------------------------------------
    # Inquiries
    # -------------------------------------------------------------------
    async def create_inquiry(self, inquiry):
        body = await self._request("POST", "/inquiries", json=payloads.inquiry_to_payload(inquiry))
        return _decode(payloads.inquiry_from_payload, body)

    async def update_inquiry(self, inquiry):
        body = await self._request("PUT", f"/inquiries/{inquiry.id}", json=payloads.inquiry_to_payload(inquiry))
        return _decode(payloads.inquiry_from_payload, body)

    async def delete_inquiry(self, inquiry_id, hard=False):
        await self._request("DELETE", f"/inquiries/{inquiry_id}", params=self._hard(hard))

    # -------------------------------------------------------------------
    # Orders
    # -------------------------------------------------------------------
    async def create_order(self, customer, cart, discount_percent, created_by):
        request = payloads.order_request_payload(customer, cart, discount_percent, created_by)
        body = await self._request("POST", "/orders", json=request)
        return _decode(payloads.order_from_payload, body)

    async def update_order_status(self, order_id, status):
        body = await self._request("PUT", f"/orders/{order_id}/status", json={"status": status})
        # Older backends answer with the full order list
        if isinstance(body, list):
            body = next(
                (record for record in body if isinstance(record, dict) and str(record.get("id")) == str(order_id)),
                None,
            )
            if body is None:
                raise GatewayError("Order not found", status_code=404)
        return _decode(payloads.order_from_payload, body)

    async def delete_order(self, order_id, hard=False):
        await self._request("DELETE", f"/orders/{order_id}", params=self._hard(hard))

    # -------------------------------------------------------------------
    # Discounts
    # -------------------------------------------------------------------
    async def create_discount(self, discount):
        body = await self._request("POST", "/discounts", json=payloads.discount_to_payload(discount))
        return _decode(payloads.discount_from_payload, body)

    async def update_discount(self, discount):
        body = await self._request("PUT", f"/discounts/{discount.id}", json=payloads.discount_to_payload(discount))
        return _decode(payloads.discount_from_payload, body)

    async def delete_discount(self, discount_id, hard=False):
        await self._request("DELETE", f"/discounts/{discount_id}", params=self._hard(hard))

    # -------------------------------------------------------------------
    # Emails
    # -------------------------------------------------------------------
    async def send_email(self, recipient, subject, body):
        record = await self._request(
            "POST",
            "/emails/send",
            json={"recipient": recipient, "subject": subject, "body": body},
        )
        if isinstance(record, dict) and "id" in record:
            return _decode(payloads.email_from_payload, record)
        return None

    async def delete_email(self, email_id, hard=False):
        await self._request("DELETE", f"/emails/{email_id}", params=self._hard(hard))

    # -------------------------------------------------------------------
    # Backup
    # -------------------------------------------------------------------
    async def create_backup(self):
        body = await self._request("POST", "/backup/create") or {}
        return BackupResult(message=body.get("message", "Backup created"), file=body.get("file"))

    async def restore_backup(self, file):
        path = Path(file)
        try:
            content = path.read_bytes()
        except OSError as exc:
            return RestoreResult(success=False, message=f"Could not read {path.name}: {exc.strerror}")

        try:
            body = await self._request(
                "POST",
                "/backup/restore",
                files={"file": (path.name, content, "application/json")},
            ) or {}
        except GatewayError as exc:
            return RestoreResult(success=False, message=exc.message)

        return RestoreResult(
            success=bool(body.get("success", True)),
            message=body.get("message", "Data restored successfully"),
        )
