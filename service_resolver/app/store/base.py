"""
Store interface for Resolver Service.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from ..models import Entity


class EntityStore(ABC):
    """Authoritative source of entities."""

    @abstractmethod
    async def find(self, identifier: Any) -> Optional[Entity]:
        """Find an entity by identifier, returning None if it does not exist."""
        pass
