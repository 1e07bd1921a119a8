"""
Store package for Resolver Service.

Stores are the authoritative source for entities. A store returns None
when an entity does not exist and raises when it cannot answer.
"""

from .base import EntityStore
from .memory import InMemoryStore, DEFAULT_ENTITIES
from .postgres import PostgreSQLStore

__all__ = ["EntityStore", "InMemoryStore", "DEFAULT_ENTITIES", "PostgreSQLStore"]
