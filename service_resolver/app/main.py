"""
Resolver service: HTTP surface over the read-through entity resolver.
"""

import re
from typing import Any, Dict, Optional, Union

from shared.base_service import BaseService
from shared.config import ServiceConfig
from shared.logging import set_entity_context

from .resolver import resolve
from .cache.base import EntityCache
from .cache.redis_cache import RedisCache
from .store.base import EntityStore
from .store.memory import InMemoryStore
from .store.postgres import PostgreSQLStore


SERVICE_NAME = "resolver"
SERVICE_PORT = 8020

_INTEGER_ID = re.compile(r"0|[1-9][0-9]*")


def parse_entity_id(raw: str) -> Union[int, str]:
    """Canonical ASCII decimal path ids address integer-keyed entities.

    Anything else, including leading zeros and non-ASCII digits, stays a string.
    """
    return int(raw) if _INTEGER_ID.fullmatch(raw) else raw


class ResolverService(BaseService):
    """Resolver service implementation."""

    def __init__(
        self,
        config: Optional[ServiceConfig] = None,
        *,
        store: Optional[EntityStore] = None,
        cache: Optional[EntityCache] = None,
    ):
        super().__init__(SERVICE_NAME, SERVICE_PORT, config=config)

        self.store = store if store is not None else self._build_store()
        if cache is not None:
            self.cache = cache
        elif self.config.cache_enabled:
            self.cache = RedisCache(self.config.redis_url, socket_timeout=self.config.redis_socket_timeout)
        else:
            self.cache = None

        self._setup_resolver_routes()

    def _build_store(self) -> EntityStore:
        if self.config.store_backend == "postgres":
            return PostgreSQLStore(self.config.postgres_dsn)
        return InMemoryStore()

    def _setup_resolver_routes(self):
        """Set up resolver-specific routes."""

        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "service": SERVICE_NAME,
                "message": "Entity Resolver - Resolver Service",
                "version": "1.0.0",
                "capabilities": ["read_through_cache", "store_fallback"]
            }

        @self.app.get("/entities/{entity_id}")
        async def get_entity(entity_id: str) -> Dict[str, Any]:
            """Resolve a single entity by id."""
            identifier = parse_entity_id(entity_id)
            set_entity_context(identifier)

            entity = await resolve(
                identifier,
                self.store,
                self.cache,
                ttl_seconds=self.config.cache_ttl_seconds,
                key_prefix=self.config.cache_key_prefix,
                metrics=self.metrics
            )
            return entity.model_dump()

    async def _check_dependencies(self) -> Dict[str, str]:
        """Check store and cache health."""
        dependencies = {}

        health_check = getattr(self.store, "health_check", None)
        if health_check is not None:
            dependencies["store"] = "ok" if await health_check() else "error"

        if self.cache is None:
            dependencies["cache"] = "disabled"
        else:
            cache_health = getattr(self.cache, "health_check", None)
            if cache_health is not None:
                dependencies["cache"] = "ok" if await cache_health() else "error"

        return dependencies

    async def start(self):
        """Start resolver service components."""
        start_store = getattr(self.store, "start", None)
        if start_store is not None:
            await start_store()

        start_cache = getattr(self.cache, "start", None)
        if start_cache is not None:
            try:
                await start_cache()
            except Exception as e:
                # Resolution proceeds without the cache
                self.logger.warning("Cache unavailable at startup, continuing without it", error=str(e))

        self.logger.info(
            "Resolver service started",
            store=type(self.store).__name__,
            cache=type(self.cache).__name__ if self.cache is not None else None
        )

    async def stop(self):
        """Stop resolver service components."""
        stop_store = getattr(self.store, "stop", None)
        if stop_store is not None:
            await stop_store()

        stop_cache = getattr(self.cache, "stop", None)
        if stop_cache is not None:
            await stop_cache()

        self.logger.info("Resolver service stopped")


def create_app(**kwargs):
    """Create resolver service application."""
    service = ResolverService(**kwargs)
    return service.app


if __name__ == "__main__":
    service = ResolverService()
    service.run()
