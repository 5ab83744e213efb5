"""Base for the engine's mutation services.

A mutation validates locally, calls the gateway, and only then touches the
session state. Whatever goes wrong is reported in the notification feed and
the log; callers get a plain success signal back.
"""

import structlog
from protean.exceptions import ValidationError

from backoffice.gateway.port import GatewayError

logger = structlog.get_logger(__name__)


def describe_validation_error(exc: ValidationError) -> str:
    messages = exc.messages if isinstance(exc.messages, dict) else {"": exc.messages}
    parts = []
    for field, errors in messages.items():
        errors = errors if isinstance(errors, list) else [errors]
        parts.extend(f"{field} {error}".strip() for error in errors)
    return "; ".join(parts)


class MutationService:
    def __init__(self, gateway, store, bus) -> None:
        self.gateway = gateway
        self.store = store
        self.bus = bus

    @property
    def notifications(self):
        return self.store.notifications

    def report_failure(self, action: str, exc: GatewayError, **context) -> None:
        logger.error(
            "Remote call failed",
            action=action,
            error=exc.message,
            status_code=exc.status_code,
            **context,
        )
        self.notifications.error(f"Error: Could not {action}.")

    def report_invalid(self, action: str, exc: ValidationError | ValueError, **context) -> None:
        reason = describe_validation_error(exc) if isinstance(exc, ValidationError) else str(exc)
        logger.warning("Rejected invalid input", action=action, reason=reason, **context)
        self.notifications.error(f"Error: Could not {action}. {reason}.")
