"""Check-event stream — explicit subscription point for event handlers."""

from __future__ import annotations

from collections.abc import Callable

import structlog

from src.core.types import DomainEvent

logger = structlog.get_logger(__name__)

EventHandler = Callable[[DomainEvent], None]


class CheckEventStream:
    """Delivers inserted check events to subscribed handlers.

    Handlers run synchronously in registration order. A handler that raises
    is logged and skipped; the remaining handlers still run.
    """

    def __init__(self) -> None:
        self._handlers: list[EventHandler] = []

    def subscribe(self, handler: EventHandler) -> None:
        """Register a handler for check events."""
        self._handlers.append(handler)

    def unsubscribe(self, handler: EventHandler) -> None:
        try:
            self._handlers.remove(handler)
        except ValueError:
            pass

    @property
    def subscriber_count(self) -> int:
        return len(self._handlers)

    def publish(self, event: DomainEvent) -> None:
        """Hand *event* to every subscriber exactly once."""
        for handler in list(self._handlers):
            try:
                handler(event)
            except Exception:
                logger.exception(
                    "check_event_handler_error",
                    handler=getattr(handler, "__qualname__", repr(handler)),
                    kind=event.kind.value,
                    entity_ref=event.entity_ref,
                )
