"""
Unit tests for shared errors, configuration and logging.
"""

import pytest

from shared.config import get_config
from shared.errors import ResolverException, InvalidArgument, NotFound, StoreFailure, CacheError
from shared.logging import (
    add_correlation_context,
    add_service_context,
    clear_context,
    set_entity_context,
    set_request_id,
)


class TestErrors:
    """Test cases for the error taxonomy."""

    @pytest.mark.parametrize("error_cls,code,status_code", [
        (InvalidArgument, "INVALID_ARGUMENT", 400),
        (NotFound, "NOT_FOUND", 404),
        (StoreFailure, "STORE_FAILURE", 502),
        (CacheError, "CACHE_ERROR", 503),
    ])
    def test_codes(self, error_cls, code, status_code):
        """Test each error carries its code and HTTP status."""
        error = error_cls("message")

        assert isinstance(error, ResolverException)
        assert error.code == code
        assert error.status_code == status_code
        assert str(error) == "message"

    def test_to_response(self):
        """Test conversion to the error response shape."""
        response = NotFound("Entity not found", {"entity_id": "3"}).to_response()

        assert response.model_dump() == {
            "trace_id": None,
            "code": "NOT_FOUND",
            "message": "Entity not found",
            "details": {"entity_id": "3"}
        }


class TestConfig:
    """Test cases for configuration."""

    def test_defaults(self, monkeypatch):
        """Test default settings."""
        for name in ("RESOLVER_CACHE_TTL_SECONDS", "RESOLVER_CACHE_KEY_PREFIX", "RESOLVER_STORE_BACKEND"):
            monkeypatch.delenv(name, raising=False)

        config = get_config("resolver", 8020)

        assert config.service_name == "resolver"
        assert config.port == 8020
        assert config.cache_ttl_seconds == 3600
        assert config.cache_key_prefix == "entity"
        assert config.store_backend == "memory"

    def test_environment_overrides(self, monkeypatch):
        """Test RESOLVER_ prefixed variables override defaults."""
        monkeypatch.setenv("RESOLVER_CACHE_TTL_SECONDS", "60")
        monkeypatch.setenv("RESOLVER_STORE_BACKEND", "postgres")
        monkeypatch.setenv("RESOLVER_CACHE_ENABLED", "false")

        config = get_config("resolver", 8020)

        assert config.cache_ttl_seconds == 60
        assert config.store_backend == "postgres"
        assert config.cache_enabled is False

    def test_rejects_non_positive_ttl(self):
        """Test TTL must be positive."""
        with pytest.raises(ValueError):
            get_config("resolver", 8020, cache_ttl_seconds=0)


class TestLoggingContext:
    """Test cases for log processors."""

    def teardown_method(self):
        clear_context()

    def test_correlation_context(self):
        """Test request and entity ids are attached to events."""
        request_id = set_request_id("req-1")
        set_entity_context(7)

        event = add_correlation_context(None, "info", {"event": "Cache hit"})

        assert request_id == "req-1"
        assert event["request_id"] == "req-1"
        assert event["entity_id"] == "7"

    def test_generated_request_id(self):
        """Test a request id is generated when none is given."""
        assert set_request_id()

    def test_service_context(self):
        """Test the service name comes from the logger name."""
        event = add_service_context(None, "info", {"logger": "resolver.cache.redis"})

        assert event["service"] == "resolver"
