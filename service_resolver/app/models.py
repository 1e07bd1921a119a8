"""
Entity data model and cache encoding for Resolver Service.
"""

import json
from typing import Any, Dict, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field


class Entity(BaseModel):
    """Immutable record identified by ``id``; any other fields are kept as-is."""

    model_config = ConfigDict(frozen=True, extra="allow")

    id: Union[int, str] = Field(..., description="Entity ID")


def to_entity(value: Union[Entity, Mapping[str, Any]]) -> Entity:
    """Coerce a store result into an Entity."""
    if isinstance(value, Entity):
        return value
    return Entity.model_validate(dict(value))


def encode_entity(entity: Entity) -> str:
    """Encode an entity as compact JSON for the cache.

    Non-JSON extras are serialized in pydantic's JSON mode (datetimes and
    UUIDs become strings, tuples become lists), so a decoded entity equals
    the original only when its extra fields are JSON-native values.
    """
    return json.dumps(entity.model_dump(mode="json"), separators=(",", ":"), ensure_ascii=False)


def decode_entity(raw: Union[str, bytes, bytearray]) -> Entity:
    """Decode a cached value produced by encode_entity.

    Raises:
        ValueError: if the value is not JSON text describing an entity.
    """
    if not isinstance(raw, (str, bytes, bytearray)):
        raise ValueError(f"Cached entity must be text, got {type(raw).__name__}")
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    data: Dict[str, Any] = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("Cached entity is not a JSON object")
    return Entity.model_validate(data)
