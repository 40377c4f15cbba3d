"""Convenience factory for wiring the notification stack."""

from __future__ import annotations

import structlog

from src.core.config import Settings
from src.notify.dispatcher import NotificationDispatcher
from src.notify.entities import EntityLookup
from src.notify.events import CheckEventStream
from src.notify.policy import DeliveryPolicy
from src.notify.resolver import TemplateResolver
from src.notify.transports import EmailTransport, WebhookTransport

logger = structlog.get_logger(__name__)


def create_notifier_stack(
    settings: Settings,
    entities: EntityLookup,
    resolver: TemplateResolver | None = None,
) -> list[NotificationDispatcher]:
    """Build one dispatcher per enabled channel, sharing a single resolver."""
    if resolver is None:
        resolver = TemplateResolver(base_url=settings.url, templates_dir=settings.templates_dir)

    dispatchers: list[NotificationDispatcher] = []

    if settings.email.enabled:
        email = settings.email
        dispatchers.append(
            NotificationDispatcher(
                policy=DeliveryPolicy.from_mapping(email.event),
                resolver=resolver,
                transport=EmailTransport(email.transport, from_address=email.message.from_address),
                entities=entities,
                default_destination=email.message.to,
                missing_params=settings.missing_params,
            )
        )
        logger.info("notifier_enabled", channel="email")

    if settings.webhook.enabled:
        webhook = settings.webhook
        dispatchers.append(
            NotificationDispatcher(
                policy=DeliveryPolicy.from_mapping(webhook.event),
                resolver=resolver,
                transport=WebhookTransport(timeout_ms=webhook.timeout_ms),
                entities=entities,
                default_destination=webhook.default_webhook,
                missing_params=settings.missing_params,
            )
        )
        logger.info("notifier_enabled", channel="webhook")

    return dispatchers


def subscribe_all(stream: CheckEventStream, dispatchers: list[NotificationDispatcher]) -> None:
    """Register every dispatcher on the check-event stream."""
    for dispatcher in dispatchers:
        stream.subscribe(dispatcher.on_event)
