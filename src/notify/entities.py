"""Read-side lookup of monitored entities."""

from __future__ import annotations

from typing import Protocol

from src.core.types import MonitoredEntity


class EntityLookup(Protocol):
    """Resolves an event's entity reference to the current entity snapshot."""

    async def get(self, entity_id: str) -> MonitoredEntity | None: ...


class InMemoryEntityStore:
    """Dict-backed EntityLookup for tests and the CLI."""

    def __init__(self, entities: list[MonitoredEntity] | None = None) -> None:
        self._entities: dict[str, MonitoredEntity] = {}
        for entity in entities or []:
            self.add(entity)

    def add(self, entity: MonitoredEntity) -> None:
        self._entities[entity.id] = entity

    def remove(self, entity_id: str) -> None:
        self._entities.pop(entity_id, None)

    async def get(self, entity_id: str) -> MonitoredEntity | None:
        return self._entities.get(entity_id)

    def __len__(self) -> int:
        return len(self._entities)
