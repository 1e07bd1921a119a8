"""
In-memory store for Resolver Service.
"""

from typing import Any, Dict, Iterable, Optional

from shared.logging import get_logger
from ..models import Entity
from .base import EntityStore


DEFAULT_ENTITIES = (
    Entity(id=1, name="John Doe", email="john@example.com"),
    Entity(id=2, name="Jane Doe", email="jane@example.com"),
)


class InMemoryStore(EntityStore):
    """Dictionary-backed store, used for local runs and tests.

    Entities are keyed by ``str(id)`` so that ``1`` and ``"1"`` address the
    same record.
    """

    def __init__(self, entities: Optional[Iterable[Entity]] = None):
        self.logger = get_logger("resolver.store.memory")
        self._entities: Dict[str, Entity] = {}
        for entity in DEFAULT_ENTITIES if entities is None else entities:
            self.add(entity)

    def add(self, entity: Entity):
        """Add or replace an entity."""
        self._entities[str(entity.id)] = entity

    async def find(self, identifier: Any) -> Optional[Entity]:
        entity = self._entities.get(str(identifier))
        self.logger.debug("Store lookup", entity_id=str(identifier), found=entity is not None)
        return entity

    async def health_check(self) -> bool:
        return True

    def __len__(self) -> int:
        return len(self._entities)
