"""Notification aggregate and the session's notification feed.

Notifications are user-facing alerts raised by checkout, the low-stock
watcher, inquiry changes, failed mutations and the liveness poller. They
live only as long as the session: nothing here is persisted.
"""

from datetime import UTC, datetime
from enum import Enum

import structlog
from protean.fields import Boolean, DateTime, String, Text

from backoffice.domain import backoffice

logger = structlog.get_logger(__name__)


class NotificationLevel(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@backoffice.aggregate
class Notification:
    message = Text(required=True)
    level = String(choices=NotificationLevel, default=NotificationLevel.INFO.value)
    created_at = DateTime()
    read = Boolean(default=False)

    @classmethod
    def create(cls, message, level=NotificationLevel.INFO):
        return cls(
            message=message,
            level=NotificationLevel(level).value,
            created_at=datetime.now(UTC),
            read=False,
        )

    def mark_read(self):
        self.read = True


class NotificationCenter:
    """Newest-first feed of notifications with a read/unread badge count."""

    def __init__(self) -> None:
        self._entries: list[Notification] = []

    def __iter__(self):
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[Notification, ...]:
        return tuple(self._entries)

    @property
    def unread_count(self) -> int:
        return sum(1 for entry in self._entries if not entry.read)

    def add(self, message: str, level=NotificationLevel.INFO) -> Notification:
        notification = Notification.create(message, level)
        self._entries.insert(0, notification)

        logger.info(
            "Notification added",
            notification_id=str(notification.id),
            level=notification.level,
            notification_message=message,
        )
        return notification

    def info(self, message: str) -> Notification:
        return self.add(message, NotificationLevel.INFO)

    def warning(self, message: str) -> Notification:
        return self.add(message, NotificationLevel.WARNING)

    def error(self, message: str) -> Notification:
        return self.add(message, NotificationLevel.ERROR)

    def mark_all_read(self) -> None:
        for entry in self._entries:
            entry.mark_read()

    def clear(self) -> None:
        self._entries.clear()
