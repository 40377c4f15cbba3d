"""Tests for domain types — immutability, entity override accessors."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from src.core.types import DomainEvent, EventKind, MonitoredEntity


class TestDomainEvent:
    def test_kind_from_string(self) -> None:
        ev = DomainEvent(kind="down", entity_ref="c1", timestamp=1000.0)  # type: ignore[arg-type]
        assert ev.kind is EventKind.DOWN
        assert ev.detail is None

    def test_unknown_kind_rejected(self) -> None:
        with pytest.raises(ValidationError):
            DomainEvent(kind="exploded", entity_ref="c1")  # type: ignore[arg-type]

    def test_immutable(self) -> None:
        ev = DomainEvent(kind=EventKind.UP, entity_ref="c1", timestamp=1000.0)
        with pytest.raises(ValidationError):
            ev.detail = "changed"  # type: ignore[misc]

    def test_timestamp_defaults_to_now(self) -> None:
        ev = DomainEvent(kind=EventKind.UP, entity_ref="c1")
        assert ev.timestamp > 0


class TestMonitoredEntity:
    def test_no_overrides_by_default(self) -> None:
        entity = MonitoredEntity(id="c1", name="FooBar")
        assert entity.params == {}
        assert entity.destination_override("webhook") is None
        assert entity.delivery_disabled("webhook") is False

    def test_override_is_per_channel(self) -> None:
        entity = MonitoredEntity(
            id="c1",
            name="FooBar",
            params={"webhook_destination": "https://hooks.example/custom", "disable_email": True},
        )
        assert entity.destination_override("webhook") == "https://hooks.example/custom"
        assert entity.destination_override("email") is None
        assert entity.delivery_disabled("email") is True
        assert entity.delivery_disabled("webhook") is False

    def test_blank_override_ignored(self) -> None:
        entity = MonitoredEntity(id="c1", name="FooBar", params={"webhook_destination": "  "})
        assert entity.destination_override("webhook") is None

    def test_missing_params(self) -> None:
        entity = MonitoredEntity(id="c1", name="FooBar", params=None)
        assert entity.params is None
        assert entity.destination_override("webhook") is None
        assert entity.delivery_disabled("webhook") is False
