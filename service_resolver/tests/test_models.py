"""
Unit tests for the Entity model and cache encoding.
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

import pytest
from pydantic import ValidationError

from service_resolver.app.models import Entity, encode_entity, decode_entity, to_entity


def test_encode_is_compact_json():
    """Test encoding matches the compact JSON stored in the cache."""
    entity = Entity(id=1, name="John Doe", email="john@example.com")

    assert encode_entity(entity) == '{"id":1,"name":"John Doe","email":"john@example.com"}'


def test_decode_keeps_extra_fields():
    """Test decoding restores id and extra fields."""
    entity = decode_entity('{"id":2,"name":"Jane Doe","email":"jane@example.com"}')

    assert entity.id == 2
    assert entity.model_dump() == {"id": 2, "name": "Jane Doe", "email": "jane@example.com"}


def test_decode_accepts_bytes():
    """Test decoding raw bytes from a non-decoding Redis client."""
    assert decode_entity(b'{"id":"u-1","name":"Z\xc3\xbcrich"}') == Entity(id="u-1", name="Zürich")


def test_decode_preserves_id_type():
    """Test string ids stay strings and integer ids stay integers."""
    assert decode_entity('{"id":"7"}').id == "7"
    assert decode_entity('{"id":7}').id == 7


@pytest.mark.parametrize("raw", ["not json", "[1, 2]", '{"name":"missing id"}', "null"])
def test_decode_rejects_invalid_entries(raw):
    """Test invalid cache entries raise ValueError."""
    with pytest.raises(ValueError):
        decode_entity(raw)


def test_entity_is_immutable():
    """Test entities cannot be mutated."""
    entity = Entity(id=1, name="John Doe")

    with pytest.raises(ValidationError):
        entity.name = "Someone Else"


def test_to_entity():
    """Test coercion from mappings and pass-through of entities."""
    entity = Entity(id=3)

    assert to_entity(entity) is entity
    assert to_entity({"id": 3, "role": "admin"}) == Entity(id=3, role="admin")


@pytest.mark.parametrize("raw", [12345, {"id": 1}, ["id", 1], 1.5])
def test_decode_rejects_non_text_entries(raw):
    """Test cached values that are not text raise ValueError."""
    with pytest.raises(ValueError, match="must be text"):
        decode_entity(raw)


def test_encode_non_json_extras():
    """Test datetime, UUID and Decimal extras are encoded in their JSON form."""
    entity = Entity(
        id=1,
        created_at=datetime(2024, 1, 2, 3, 4, 5),
        ref=UUID("12345678-1234-5678-1234-567812345678"),
        balance=Decimal("1.50")
    )

    assert encode_entity(entity) == (
        '{"id":1,"created_at":"2024-01-02T03:04:05",'
        '"ref":"12345678-1234-5678-1234-567812345678","balance":"1.50"}'
    )
    assert decode_entity(encode_entity(entity)).model_dump() == {
        "id": 1,
        "created_at": "2024-01-02T03:04:05",
        "ref": "12345678-1234-5678-1234-567812345678",
        "balance": "1.50"
    }
