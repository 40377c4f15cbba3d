"""Check-event notification subsystem: policy, templates, transports, dispatch."""

from src.notify.dispatcher import NotificationDispatcher
from src.notify.entities import EntityLookup, InMemoryEntityStore
from src.notify.events import CheckEventStream
from src.notify.factory import create_notifier_stack, subscribe_all
from src.notify.forms import populate_from_entity
from src.notify.policy import DeliveryPolicy
from src.notify.resolver import TemplateResolver
from src.notify.transports import EmailTransport, Transport, WebhookTransport
from src.notify.types import DeliveryOutcome, RenderedMessage

__all__ = [
    "CheckEventStream",
    "DeliveryOutcome",
    "DeliveryPolicy",
    "EmailTransport",
    "EntityLookup",
    "InMemoryEntityStore",
    "NotificationDispatcher",
    "RenderedMessage",
    "TemplateResolver",
    "Transport",
    "WebhookTransport",
    "create_notifier_stack",
    "populate_from_entity",
    "subscribe_all",
]
