"""Per-event-kind delivery toggles."""

from __future__ import annotations

from collections.abc import Mapping

import structlog

from src.core.types import EventKind

logger = structlog.get_logger(__name__)


class DeliveryPolicy:
    """Decides whether an event kind triggers a notification at all.

    Built once at startup and read-only afterwards. Kinds that are not
    declared are disabled.
    """

    def __init__(self, enabled_by_kind: Mapping[EventKind, bool] | None = None) -> None:
        self._enabled: dict[EventKind, bool] = dict(enabled_by_kind or {})

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, object] | None) -> DeliveryPolicy:
        """Build a policy from a config mapping such as ``{"down": True}``."""
        enabled: dict[EventKind, bool] = {}
        for name, value in (mapping or {}).items():
            try:
                kind = EventKind(str(name).lower())
            except ValueError:
                logger.warning("unknown_event_kind_in_policy", kind=name)
                continue
            enabled[kind] = bool(value)
        return cls(enabled)

    def is_enabled(self, kind: EventKind | str) -> bool:
        try:
            return self._enabled.get(EventKind(kind), False)
        except ValueError:
            return False

    @property
    def enabled_kinds(self) -> frozenset[EventKind]:
        return frozenset(k for k, v in self._enabled.items() if v)

    def __repr__(self) -> str:
        kinds = ",".join(sorted(self.enabled_kinds))
        return f"DeliveryPolicy(enabled={kinds or '-'})"
