"""
Redis caching layer for Resolver Service.
"""

from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from shared.logging import get_logger
from shared.errors import CacheError
from .base import EntityCache


class RedisCache(EntityCache):
    """Redis-backed entity cache."""

    def __init__(self, redis_url: str, socket_timeout: float = 5.0):
        self.redis_url = redis_url
        self.socket_timeout = socket_timeout
        self.logger = get_logger("resolver.cache.redis")
        self.redis: Optional[redis.Redis] = None

    async def start(self):
        """Start the Redis cache."""
        try:
            self.redis = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
                socket_connect_timeout=self.socket_timeout,
                socket_timeout=self.socket_timeout,
                health_check_interval=30
            )

            await self.redis.ping()

            self.logger.info("Redis cache started", redis_url=self.redis_url)

        except (RedisError, OSError) as e:
            self.logger.error("Failed to start Redis cache", error=str(e))
            raise CacheError(str(e), {"redis_url": self.redis_url}) from e

    async def stop(self):
        """Stop the Redis cache."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            self.logger.info("Redis cache stopped")

    async def get(self, key: str) -> Optional[str]:
        """Get a cached value."""
        client = self._client()
        try:
            value = await client.get(key)
        except RedisError as e:
            raise CacheError(str(e), {"cache_key": key}) from e

        self.logger.debug("Cache lookup", cache_key=key, hit=bool(value))
        return value

    async def set(self, key: str, value: str, ttl_seconds: int) -> bool:
        """Cache a value with an expiry."""
        client = self._client()
        try:
            await client.set(key, value, ex=ttl_seconds)
        except RedisError as e:
            raise CacheError(str(e), {"cache_key": key}) from e

        self.logger.debug("Cached value", cache_key=key, ttl=ttl_seconds)
        return True

    async def health_check(self) -> bool:
        """Check Redis health."""
        if self.redis is None:
            return False
        try:
            await self.redis.ping()
            return True
        except (RedisError, OSError):
            return False

    def _client(self) -> redis.Redis:
        if self.redis is None:
            raise CacheError("Redis cache not started", {"redis_url": self.redis_url})
        return self.redis
