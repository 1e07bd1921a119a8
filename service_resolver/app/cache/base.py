"""
Cache interface and adapters for Resolver Service.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from shared.logging import get_logger

from ..models import Entity, encode_entity


class EntityCache(ABC):
    """Key/value cache holding encoded entities."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the cached value, or None/empty on a miss."""
        pass

    @abstractmethod
    async def set(self, key: str, value: str, ttl_seconds: int) -> Any:
        """Store a value that expires after ttl_seconds."""
        pass

    async def set_entity(self, key: str, entity: Entity, ttl_seconds: int) -> Any:
        """Encode an entity and store it under key."""
        return await self.set(key, encode_entity(entity), ttl_seconds)


class NullCache(EntityCache):
    """Stands in for an absent cache: always misses, drops writes."""

    async def get(self, key: str) -> Optional[str]:
        return None

    async def set(self, key: str, value: str, ttl_seconds: int) -> bool:
        return False

    async def set_entity(self, key: str, entity: Entity, ttl_seconds: int) -> bool:
        return False


class BestEffortCache(EntityCache):
    """Wraps a cache so that failures degrade to a miss or a skipped write."""

    def __init__(self, cache: Any, metrics: Optional[Any] = None):
        self.cache = cache
        self.metrics = metrics
        self.logger = get_logger("resolver.cache.best_effort")

    async def get(self, key: str) -> Optional[str]:
        """Get a cached value; any error is reported as a miss."""
        try:
            return await self.cache.get(key)
        except Exception as e:
            self.logger.warning(
                "Cache read failed, treating as miss",
                cache_key=key,
                error=str(e),
                error_type=type(e).__name__
            )
            self._record_error("get")
            return None

    async def set(self, key: str, value: str, ttl_seconds: int) -> bool:
        """Write a value once; any error is logged and discarded."""
        try:
            await self.cache.set(key, value, ttl_seconds)
            return True
        except Exception as e:
            self._write_failed(key, ttl_seconds, e)
            return False

    async def set_entity(self, key: str, entity: Entity, ttl_seconds: int) -> bool:
        """Encode and write an entity once; encode and write errors are both discarded."""
        try:
            await self.cache.set(key, encode_entity(entity), ttl_seconds)
            return True
        except Exception as e:
            self._write_failed(key, ttl_seconds, e)
            return False

    def _write_failed(self, key: str, ttl_seconds: int, error: Exception):
        self.logger.warning(
            "Cache write failed, skipping",
            cache_key=key,
            ttl=ttl_seconds,
            error=str(error),
            error_type=type(error).__name__
        )
        self._record_error("set")

    def _record_error(self, operation: str):
        if self.metrics is not None:
            self.metrics.increment_counter("resolver_cache_errors_total", operation=operation)
