"""
Read-through entity resolution.

``resolve`` looks an entity up in the cache, falls back to the store on a
miss and writes what the store returned back into the cache. The cache is
optional and purely best-effort in both directions: a failed or corrupt
read counts as a miss and a failed write is dropped. Store errors are
never absorbed.
"""

import time
from typing import Any, Optional, TYPE_CHECKING

from shared.logging import get_logger
from shared.errors import InvalidArgument, NotFound
from .cache.base import EntityCache, NullCache, BestEffortCache
from .models import Entity, decode_entity, to_entity

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.metrics import MetricsCollector
    from .store.base import EntityStore


DEFAULT_TTL_SECONDS = 3600
DEFAULT_KEY_PREFIX = "entity"

logger = get_logger("resolver.resolve")


def entity_cache_key(identifier: Any, prefix: str = DEFAULT_KEY_PREFIX) -> str:
    """Derive the cache key for an identifier."""
    return f"{prefix}:{identifier}"


def _cache_for(cache: Optional[Any], metrics: Optional["MetricsCollector"]) -> EntityCache:
    if cache is None:
        return NullCache()
    return BestEffortCache(cache, metrics=metrics)


async def resolve(
    identifier: Any,
    store: "EntityStore",
    cache: Optional[Any] = None,
    *,
    ttl_seconds: int = DEFAULT_TTL_SECONDS,
    key_prefix: str = DEFAULT_KEY_PREFIX,
    metrics: Optional["MetricsCollector"] = None,
) -> Entity:
    """Resolve an entity by identifier, read-through the cache.

    Args:
        identifier: Entity ID; must be truthy.
        store: Authoritative store exposing ``async find(identifier)``.
        cache: Optional cache exposing ``async get(key)`` and
            ``async set(key, value, ttl_seconds)``. ``None`` disables caching.
        ttl_seconds: Expiry applied to entries written on a miss.
        key_prefix: Prefix of the derived cache key.
        metrics: Optional collector for hit/miss/store counters.

    Returns:
        The cached entity on a hit, otherwise the entity from the store.

    Raises:
        InvalidArgument: identifier is missing.
        NotFound: the store has no such entity.
        Exception: whatever the store raised, unchanged.
    """
    if not identifier:
        raise InvalidArgument("Entity ID is required")

    start_time = time.time()
    key = entity_cache_key(identifier, key_prefix)
    entity_cache = _cache_for(cache, metrics)

    cached = await entity_cache.get(key)
    if cached:
        try:
            entity = decode_entity(cached)
        except ValueError as e:
            logger.warning("Discarding undecodable cache entry", cache_key=key, error=str(e))
            _count(metrics, "resolver_cache_errors_total", operation="decode")
        else:
            logger.debug("Cache hit", cache_key=key)
            _count(metrics, "resolver_cache_hits_total")
            _observe(metrics, start_time, "cache")
            return entity

    _count(metrics, "resolver_cache_misses_total")

    try:
        found = await store.find(identifier)
    except Exception:
        _count(metrics, "resolver_store_lookups_total", result="error")
        raise

    if found is None:
        _count(metrics, "resolver_store_lookups_total", result="not_found")
        raise NotFound("Entity not found", {"entity_id": str(identifier)})

    _count(metrics, "resolver_store_lookups_total", result="found")
    entity = to_entity(found)

    await entity_cache.set_entity(key, entity, ttl_seconds)

    logger.debug("Resolved from store", cache_key=key)
    _observe(metrics, start_time, "store")
    return entity


def _count(metrics: Optional["MetricsCollector"], name: str, **labels):
    if metrics is not None:
        metrics.increment_counter(name, **labels)


def _observe(metrics: Optional["MetricsCollector"], start_time: float, source: str):
    if metrics is not None:
        metrics.observe_histogram(
            "resolver_resolve_duration_seconds",
            time.time() - start_time,
            source=source
        )
