"""Typed access on top of any configuration source.

Purpose
-------
Offer the convenience layer applications actually call: fetch a value and
assert it has the expected type. Sources never coerce values, so a mismatch is
reported as :class:`~lib_config_chain.domain.errors.TypeMismatch` instead of
being converted.

Contents
    - ``ConfigAccessor``: wraps a source; ``get_*`` return ``(value, found)``
      and ``require_*`` raise :class:`MissingKey` on absence.

Type Rules
----------
Checks are exact: ``True`` is not an ``int`` and ``1`` is not a ``float``.
Environment and argument sources only ever produce strings, so their values
satisfy :meth:`ConfigAccessor.get_string` alone.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Callable, TypeVar

from ..domain.errors import MissingKey, TypeMismatch
from .ports import Source

T = TypeVar("T")


def _is_string(value: Any) -> bool:
    return isinstance(value, str)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_float(value: Any) -> bool:
    return isinstance(value, float)


def _is_bool(value: Any) -> bool:
    return isinstance(value, bool)


def _is_list(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _is_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


class ConfigAccessor:
    """Wrap *source* with typed getters.

    The accessor is itself a source, so it can be placed in a fallback chain.

    Examples
    --------
    >>> from lib_config_chain.domain.sources import TreeSource
    >>> settings = ConfigAccessor(TreeSource({"name": "demo", "port": 8080}))
    >>> settings.get_string("name")
    ('demo', True)
    >>> settings.require_int("port")
    8080
    >>> settings.get_string("missing")
    (None, False)
    >>> settings.get_string("port")
    Traceback (most recent call last):
    ...
    lib_config_chain.domain.errors.TypeMismatch: expected a string for key 'port', got 8080 (int)
    """

    __slots__ = ("_source",)

    def __init__(self, source: Source) -> None:
        self._source = source

    @property
    def source(self) -> Source:
        return self._source

    def resolve(self, key: str) -> tuple[Any, bool]:
        return self._source.resolve(key)

    def get_value(self, key: str, default: Any = None) -> Any:
        """Return the raw value for *key* or *default* when absent."""

        value, found = self._source.resolve(key)
        return value if found else default

    def get_string(self, key: str) -> tuple[str | None, bool]:
        return self._typed(key, "string", _is_string)

    def get_int(self, key: str) -> tuple[int | None, bool]:
        return self._typed(key, "integer", _is_int)

    def get_float(self, key: str) -> tuple[float | None, bool]:
        return self._typed(key, "float", _is_float)

    def get_bool(self, key: str) -> tuple[bool | None, bool]:
        return self._typed(key, "boolean", _is_bool)

    def get_list(self, key: str) -> tuple[Sequence[Any] | None, bool]:
        return self._typed(key, "list", _is_list)

    def get_mapping(self, key: str) -> tuple[Mapping[Any, Any] | None, bool]:
        return self._typed(key, "mapping", _is_mapping)

    def require_string(self, key: str) -> str:
        """Return the string stored under *key*; absence raises :class:`MissingKey`."""

        return self._required(key, self.get_string)

    def require_int(self, key: str) -> int:
        return self._required(key, self.get_int)

    def require_float(self, key: str) -> float:
        return self._required(key, self.get_float)

    def require_bool(self, key: str) -> bool:
        return self._required(key, self.get_bool)

    def require_list(self, key: str) -> Sequence[Any]:
        return self._required(key, self.get_list)

    def require_mapping(self, key: str) -> Mapping[Any, Any]:
        return self._required(key, self.get_mapping)

    def _typed(self, key: str, expected: str, check: Callable[[Any], bool]) -> tuple[Any, bool]:
        value, found = self._source.resolve(key)
        if not found:
            return None, False
        if not check(value):
            raise TypeMismatch(key, expected, value)
        return value, True

    @staticmethod
    def _required(key: str, getter: Callable[[str], tuple[T | None, bool]]) -> T:
        value, found = getter(key)
        if not found:
            raise MissingKey(key)
        return value  # type: ignore[return-value]
