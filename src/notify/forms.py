"""Dashboard form hook — persists per-entity notification overrides."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from src.core.types import SUPPORTED_ENTITY_TYPES, MonitoredEntity


def populate_from_entity(
    entity: MonitoredEntity,
    edited_fields: Mapping[str, Any],
    entity_type: str,
    channel: str,
) -> MonitoredEntity:
    """Copy the *channel* override fields from an edited form onto *entity*.

    Only HTTP(S) checks carry overrides; other entity types are returned
    unchanged. The edited form uses the same keys as the stored params:
    ``<channel>_destination`` and ``disable_<channel>``.
    """
    if entity_type not in SUPPORTED_ENTITY_TYPES:
        return entity

    destination_key = f"{channel}_destination"
    disabled_key = f"disable_{channel}"

    params = dict(entity.params or {})
    params[destination_key] = edited_fields.get(destination_key)
    params[disabled_key] = bool(edited_fields.get(disabled_key))
    return entity.model_copy(update={"params": params})
