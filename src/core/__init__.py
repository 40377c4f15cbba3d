"""Core module — config, types, logging, exceptions."""

from src.core.config import Settings, get_settings, load_settings, reset_settings
from src.core.exceptions import (
    ConfigurationError,
    EntityResolutionError,
    NotifyError,
    RenderError,
    TemplateError,
    TemplateNotFound,
    TransportError,
)
from src.core.logging import setup_logging
from src.core.types import DomainEvent, EventKind, MonitoredEntity

__all__ = [
    "ConfigurationError",
    "DomainEvent",
    "EntityResolutionError",
    "EventKind",
    "MonitoredEntity",
    "NotifyError",
    "RenderError",
    "Settings",
    "TemplateError",
    "TemplateNotFound",
    "TransportError",
    "get_settings",
    "load_settings",
    "reset_settings",
    "setup_logging",
]
