from __future__ import annotations

from lib_config_chain.domain.errors import ConfigError, InvalidFormat, MissingKey, NotFound, TypeMismatch


def test_error_hierarchy() -> None:
    for exc_type in (InvalidFormat, NotFound, TypeMismatch, MissingKey):
        assert issubclass(exc_type, ConfigError)


def test_type_mismatch_carries_details() -> None:
    exc = TypeMismatch("service.port", "string", 8080)
    assert exc.key == "service.port"
    assert exc.expected == "string"
    assert exc.actual == 8080
    assert str(exc) == "expected a string for key 'service.port', got 8080 (int)"


def test_missing_key_message() -> None:
    exc = MissingKey("service.endpoint")
    assert exc.key == "service.endpoint"
    assert str(exc) == "key 'service.endpoint' is required"
