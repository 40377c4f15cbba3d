"""Exception hierarchy for the notification pipeline."""

from __future__ import annotations


class NotifyError(Exception):
    """Base exception for all notification errors."""


class EntityResolutionError(NotifyError):
    """The entity referenced by an event could not be found."""


class ConfigurationError(NotifyError):
    """Configuration does not allow a notification to be delivered."""


class TemplateError(NotifyError):
    """Base exception for template lookup and rendering failures."""


class TemplateNotFound(TemplateError):
    """No template is registered for the requested event kind."""


class RenderError(TemplateError):
    """The template engine could not render the supplied context."""


class TransportError(NotifyError):
    """A transport failed to deliver a message (network, auth, HTTP 5xx)."""
