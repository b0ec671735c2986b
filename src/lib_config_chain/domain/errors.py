"""Domain-level exception hierarchy.

Purpose
-------
Expose the error taxonomy shared by adapters, the composition root, the typed
accessor, and consuming applications. Absence of a key is *not* part of this
taxonomy: every :class:`~lib_config_chain.application.ports.Source` reports a
missing key through its ``(value, found)`` return value instead.

Contents
--------
* :class:`ConfigError` – umbrella base class for all library failures.
* :class:`InvalidFormat` – malformed input (argument lists, non-mapping
  documents, unsupported file suffixes).
* :class:`NotFound` – a configuration file or optional decoder is missing.
* :class:`TypeMismatch` – the typed accessor found a value of the wrong type.
* :class:`MissingKey` – the typed accessor was asked for a required key that no
  source provides.
"""

from __future__ import annotations


class ConfigError(Exception):
    """Base type for all exceptions emitted by ``lib_config_chain``.

    Why
    ----
    Provide a single catch-all type for consumers that do not need fine-grained
    handling.
    """


class InvalidFormat(ConfigError):
    """Raised when an input artifact cannot be turned into a source.

    Typical Sources
    ---------------
    Argument entries without ``=``, documents whose top level is not a
    mapping, and files with an unknown suffix.
    """


class NotFound(ConfigError):
    """Represents a missing configuration file or optional parser.

    The composition root treats this as non-fatal when assembling layered
    chains; direct callers of :func:`lib_config_chain.core.from_file` see it
    raised.
    """


class TypeMismatch(ConfigError):
    """A value was found but does not have the type the caller asked for.

    Attributes
    ----------
    key:
        Dotted key that was resolved.
    expected:
        Human readable name of the requested type.
    actual:
        The value that was found.

    Examples
    --------
    >>> str(TypeMismatch("port", "string", 8080))
    "expected a string for key 'port', got 8080 (int)"
    """

    def __init__(self, key: str, expected: str, actual: object) -> None:
        self.key = key
        self.expected = expected
        self.actual = actual
        super().__init__(f"expected a {expected} for key '{key}', got {actual!r} ({type(actual).__name__})")


class MissingKey(ConfigError):
    """A required key could not be resolved by any source.

    Examples
    --------
    >>> str(MissingKey("service.endpoint"))
    "key 'service.endpoint' is required"
    """

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"key '{key}' is required")
