"""Domain types shared by the monitoring engine and the notifiers."""

from __future__ import annotations

import time
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class EventKind(StrEnum):
    """Check state transitions reported by the monitoring engine."""

    UP = "up"
    DOWN = "down"
    PAUSED = "paused"
    RESTARTED = "restarted"


# Entity types whose edit form carries notification overrides.
SUPPORTED_ENTITY_TYPES: frozenset[str] = frozenset({"http", "https"})


class DomainEvent(BaseModel):
    """A single check-state transition. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    kind: EventKind
    entity_ref: str
    timestamp: float = Field(default_factory=time.time)
    detail: str | None = None


class MonitoredEntity(BaseModel):
    """Read model of a monitored target (e.g. an HTTP check).

    ``params`` holds the entity-scoped parameters persisted from the edit
    form. ``None`` means the entity carries no parameter mapping at all,
    which is distinct from an empty mapping.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    target_url: str = ""
    type: str = "http"
    params: dict[str, Any] | None = Field(default_factory=dict)

    def destination_override(self, channel: str) -> str | None:
        """Per-entity destination for *channel*, or None when unset/blank."""
        if not self.params:
            return None
        value = self.params.get(f"{channel}_destination")
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    def delivery_disabled(self, channel: str) -> bool:
        if not self.params:
            return False
        return bool(self.params.get(f"disable_{channel}", False))
