"""
Cache package for Resolver Service.

Cache collaborators store the JSON encoding of an entity under
"entity:<id>" with a TTL. Every cache is optional: NullCache stands in
when none is configured, and BestEffortCache turns any failure into a
miss on read and a skipped write on set.
"""

from .base import EntityCache, NullCache, BestEffortCache
from .redis_cache import RedisCache

__all__ = ["EntityCache", "NullCache", "BestEffortCache", "RedisCache"]
