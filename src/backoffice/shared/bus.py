"""In-process async event bus.

Domain events published here are delivered to handler objects whose
coroutine methods are tagged with ``@handles(EventClass)``. Delivery is
sequential and in registration order, so a handler can rely on the
effects of the handlers registered before it.
"""

from collections import defaultdict
from collections.abc import Awaitable, Callable

import structlog

logger = structlog.get_logger(__name__)

_HANDLED_EVENTS = "_handled_events"

Handler = Callable[[object], Awaitable[None]]


def handles(*event_classes):
    """Mark a coroutine method as the handler for one or more event classes."""

    def decorator(fn):
        setattr(fn, _HANDLED_EVENTS, getattr(fn, _HANDLED_EVENTS, ()) + event_classes)
        return fn

    return decorator


class EventBus:
    def __init__(self) -> None:
        self._handlers: dict[type, list[Handler]] = defaultdict(list)

    def subscribe(self, event_cls: type, handler: Handler) -> None:
        self._handlers[event_cls].append(handler)

    def register(self, handler_obj) -> None:
        """Subscribe every ``@handles``-tagged method of ``handler_obj``."""
        for attr_name in dir(type(handler_obj)):
            method = getattr(handler_obj, attr_name, None)
            for event_cls in getattr(method, _HANDLED_EVENTS, ()):
                self.subscribe(event_cls, method)

    def handlers_for(self, event_cls: type) -> list[Handler]:
        return list(self._handlers.get(event_cls, []))

    async def publish(self, event) -> None:
        """Deliver ``event`` to its handlers.

        A failing handler is logged and skipped; it never prevents the
        remaining handlers from running or propagates to the publisher.
        """
        event_name = type(event).__name__
        for handler in self.handlers_for(type(event)):
            try:
                await handler(event)
            except Exception:
                logger.exception(
                    "Event handler failed",
                    event_type=event_name,
                    handler=getattr(handler, "__qualname__", repr(handler)),
                )
