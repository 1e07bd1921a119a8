"""
PostgreSQL store for Resolver Service.
"""

import json
from typing import Any, Optional

import asyncpg

from shared.logging import get_logger
from shared.errors import StoreFailure
from ..models import Entity
from .base import EntityStore


DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)


class PostgreSQLStore(EntityStore):
    """PostgreSQL-backed entity store.

    Entities live in a single ``entities`` table as JSONB documents keyed by
    the text form of their id. Driver and connection errors are re-raised as
    StoreFailure carrying the driver's message.
    """

    def __init__(self, dsn: str):
        self.dsn = dsn
        self.logger = get_logger("resolver.store.postgres")
        self.pool: Optional[asyncpg.Pool] = None

    async def start(self):
        """Start the store."""
        try:
            self.pool = await asyncpg.create_pool(
                self.dsn,
                min_size=2,
                max_size=10,
                command_timeout=30
            )

            await self._create_tables()

            self.logger.info("PostgreSQL store started")

        except DRIVER_ERRORS as e:
            self.logger.error("Failed to start PostgreSQL store", error=str(e))
            raise StoreFailure(str(e)) from e

    async def stop(self):
        """Stop the store."""
        if self.pool:
            await self.pool.close()
            self.pool = None
            self.logger.info("PostgreSQL store stopped")

    async def _create_tables(self):
        """Create database tables."""
        async with self.pool.acquire() as conn:
            await conn.execute("""
                CREATE TABLE IF NOT EXISTS entities (
                    id TEXT PRIMARY KEY,
                    data JSONB NOT NULL,
                    updated_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT NOW()
                );
            """)

    async def find(self, identifier: Any) -> Optional[Entity]:
        """Load an entity by id."""
        pool = self._pool()
        try:
            async with pool.acquire() as conn:
                row = await conn.fetchrow("""
                    SELECT data FROM entities WHERE id = $1
                """, str(identifier))
        except DRIVER_ERRORS as e:
            self.logger.error("Error loading entity", entity_id=str(identifier), error=str(e))
            raise StoreFailure(str(e)) from e

        if not row:
            return None

        data = row["data"]
        if isinstance(data, str):
            data = json.loads(data)
        return Entity.model_validate(data)

    async def save(self, entity: Entity):
        """Insert or update an entity."""
        pool = self._pool()
        try:
            async with pool.acquire() as conn:
                await conn.execute("""
                    INSERT INTO entities (id, data, updated_at)
                    VALUES ($1, $2::jsonb, NOW())
                    ON CONFLICT (id) DO UPDATE SET
                        data = EXCLUDED.data,
                        updated_at = EXCLUDED.updated_at
                """, str(entity.id), entity.model_dump_json())
        except DRIVER_ERRORS as e:
            self.logger.error("Error saving entity", entity_id=str(entity.id), error=str(e))
            raise StoreFailure(str(e)) from e

        self.logger.info("Entity saved", entity_id=str(entity.id))

    async def health_check(self) -> bool:
        """Check database health."""
        if self.pool is None:
            return False
        try:
            async with self.pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
                return True
        except DRIVER_ERRORS:
            return False

    def _pool(self) -> asyncpg.Pool:
        if self.pool is None:
            raise StoreFailure("PostgreSQL store not started")
        return self.pool
