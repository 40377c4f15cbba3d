"""Notification dispatcher — routes check events through policy, templates and a transport."""

from __future__ import annotations

import asyncio
from typing import Literal

import structlog

from src.core.exceptions import (
    ConfigurationError,
    EntityResolutionError,
    TemplateError,
)
from src.core.types import DomainEvent, MonitoredEntity
from src.notify.entities import EntityLookup
from src.notify.policy import DeliveryPolicy
from src.notify.resolver import TemplateResolver
from src.notify.transports import Transport
from src.notify.types import DeliveryOutcome

logger = structlog.get_logger(__name__)

MissingParamsPolicy = Literal["continue", "abort"]


class NotificationDispatcher:
    """Delivers check events through a single transport.

    - ``on_event`` is the synchronous subscriber: it schedules the dispatch
      on the running loop and returns at once.
    - Disabled event kinds are dropped before any lookup or rendering.
    - Every failure (entity lookup, configuration, template, transport) is
      logged and swallowed. Nothing is retried.
    """

    def __init__(
        self,
        *,
        policy: DeliveryPolicy,
        resolver: TemplateResolver,
        transport: Transport,
        entities: EntityLookup,
        default_destination: str | list[str] | None = None,
        channel: str | None = None,
        missing_params: MissingParamsPolicy = "continue",
    ) -> None:
        self._policy = policy
        self._resolver = resolver
        self._transport = transport
        self._entities = entities
        self._default_destination = default_destination or None
        self._channel = channel or transport.channel
        self._missing_params = missing_params
        # Strong references so in-flight tasks are not garbage collected.
        self._tasks: set[asyncio.Task[DeliveryOutcome | None]] = set()

    @property
    def channel(self) -> str:
        return self._channel

    @property
    def pending(self) -> int:
        return len(self._tasks)

    # ── Subscriber entry point ──────────────────────────────────

    def on_event(self, event: DomainEvent) -> None:
        """Schedule delivery of *event* without waiting for it."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.error(
                "notification_dropped_no_loop",
                channel=self._channel,
                kind=event.kind.value,
                entity_ref=event.entity_ref,
            )
            return

        task = loop.create_task(self.dispatch(event))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    # ── Pipeline ────────────────────────────────────────────────

    async def dispatch(self, event: DomainEvent) -> DeliveryOutcome | None:
        """Run the full pipeline for one event.

        Returns the transport outcome, or None when nothing was sent.
        """
        try:
            return await self._dispatch(event)
        except Exception:
            logger.exception(
                "notification_dispatch_error",
                channel=self._channel,
                kind=event.kind.value,
                entity_ref=event.entity_ref,
            )
            return None

    async def _dispatch(self, event: DomainEvent) -> DeliveryOutcome | None:
        log = logger.bind(channel=self._channel, kind=event.kind.value, entity_ref=event.entity_ref)

        if not self._policy.is_enabled(event.kind):
            return None

        try:
            entity = await self._resolve_entity(event)
        except EntityResolutionError as exc:
            log.error("entity_resolution_failed", error=str(exc))
            return None

        if entity.params is None:
            log.error("entity_params_missing", entity=entity.name, action=self._missing_params)
            if self._missing_params == "abort":
                return None

        if entity.delivery_disabled(self._channel):
            return None

        try:
            destination = self._resolve_destination(entity)
        except ConfigurationError as exc:
            log.error("notification_misconfigured", entity=entity.name, error=str(exc))
            return None

        try:
            message = self._resolver.render(event.kind, {"entity": entity, "event": event})
        except TemplateError as exc:
            log.error("notification_render_failed", entity=entity.name, error=str(exc))
            return None

        outcome = await self._transport.send(destination, message)
        if outcome.success:
            log.info("notification_sent", entity=entity.name)
        else:
            log.error("notification_failed", entity=entity.name, error=outcome.error_detail)
        return outcome

    async def _resolve_entity(self, event: DomainEvent) -> MonitoredEntity:
        try:
            entity = await self._entities.get(event.entity_ref)
        except Exception as exc:
            raise EntityResolutionError(f"lookup of {event.entity_ref!r} failed: {exc}") from exc
        if entity is None:
            raise EntityResolutionError(f"entity {event.entity_ref!r} not found")
        return entity

    def _resolve_destination(self, entity: MonitoredEntity) -> str | list[str]:
        override = entity.destination_override(self._channel)
        if override:
            return override
        if self._default_destination:
            return self._default_destination
        raise ConfigurationError(f"no {self._channel} destination configured for {entity.name!r}")

    # ── Lifecycle ───────────────────────────────────────────────

    async def drain(self) -> None:
        """Wait for all in-flight dispatches to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def close(self) -> None:
        await self.drain()
        try:
            await self._transport.close()
        except Exception:
            logger.exception("transport_close_error", channel=self._channel)
