"""Environment variable adapter.

Purpose
-------
Answer dotted-key lookups from environment variables. The key is transliterated
(``service.timeout`` -> ``service_timeout``) and handed to an injected lookup
function, so tests can substitute a plain dictionary for the process
environment.

Key behaviours
--------------
* No case folding: ``Service.Timeout`` looks up ``Service_Timeout``.
* No prefixing inside :class:`EnvSource`; a prefix is the lookup function's
  business (see :func:`environ_lookup`).
* Values are returned as the raw strings the environment holds.
"""

from __future__ import annotations

import os
from typing import Any, Callable, Iterable, Mapping

from ...application.ports import EnvLookup, EnvNames
from ...domain.path import SEPARATOR


def dot_to_snake(key: str) -> str:
    """Replace every ``.`` in *key* with ``_``.

    Examples
    --------
    >>> dot_to_snake("section.foo")
    'section_foo'
    >>> dot_to_snake("a..b.")
    'a__b_'
    """

    return key.replace(SEPARATOR, "_")


def environ_lookup(prefix: str | None = None, environ: Mapping[str, str] | None = None) -> EnvLookup:
    """Build a lookup function over *environ* (default :data:`os.environ`).

    When *prefix* is given it is prepended verbatim to every requested name.

    Examples
    --------
    >>> lookup = environ_lookup("DEMO_", {"DEMO_service_port": "8080"})
    >>> lookup("service_port")
    ('8080', True)
    >>> lookup("service_host")
    (None, False)
    """

    source = os.environ if environ is None else environ
    head = prefix or ""

    def lookup(name: str) -> tuple[str | None, bool]:
        full_name = head + name
        if full_name in source:
            return source[full_name], True
        return None, False

    return lookup


def environ_names(prefix: str | None = None, environ: Mapping[str, str] | None = None) -> EnvNames:
    """Build an enumeration function matching :func:`environ_lookup`.

    Names are yielded with *prefix* stripped, so each one can be passed back to
    the lookup function unchanged.

    Examples
    --------
    >>> names = environ_names("DEMO_", {"DEMO_a": "1", "OTHER": "2"})
    >>> sorted(names())
    ['a']
    """

    source = os.environ if environ is None else environ
    head = prefix or ""

    def names() -> list[str]:
        return [name[len(head) :] for name in source if name.startswith(head) and len(name) > len(head)]

    return names


class EnvSource:
    """Resolve dotted keys through a transliterated environment lookup.

    Parameters
    ----------
    lookup:
        ``lookup(name) -> (value, found)``. Defaults to the process
        environment.
    names:
        Optional enumeration of the names visible to *lookup*.
    convert:
        Key transliteration, :func:`dot_to_snake` by default.

    Examples
    --------
    >>> source = EnvSource(lookup=environ_lookup(environ={"section_foo": "bar"}))
    >>> source.resolve("section.foo")
    ('bar', True)
    >>> source.resolve("section.bar")
    (None, False)
    """

    __slots__ = ("_lookup", "_names", "_convert")

    def __init__(
        self,
        *,
        lookup: EnvLookup | None = None,
        names: EnvNames | None = None,
        convert: Callable[[str], str] = dot_to_snake,
    ) -> None:
        if lookup is None:
            lookup = environ_lookup()
            if names is None:
                names = environ_names()
        self._lookup = lookup
        self._names = names
        self._convert = convert

    def resolve(self, key: str) -> tuple[Any, bool]:
        value, found = self._lookup(self._convert(key))
        if not found:
            return None, False
        return value, True

    def variable_name(self, key: str) -> str:
        """Return the name *key* is looked up under."""

        return self._convert(key)

    def names(self) -> Iterable[str]:
        """Enumerate visible variable names, or nothing when no enumerator was injected."""

        if self._names is None:
            return ()
        return self._names()
