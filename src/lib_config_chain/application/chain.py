"""Application-layer fallback composition.

Purpose
-------
Combine an ordered list of sources into a single
:class:`~lib_config_chain.application.ports.Source` that answers with the first
source that knows a key. Earlier entries take precedence over later ones.

Contents
    - ``FallbackSource``: immutable chain with copy-on-extend helpers.
    - ``fallback``: convenience constructor mirroring the variadic call style.

System Role
-----------
Used by :func:`lib_config_chain.core.layered` to stack argument, environment,
and file sources, and directly by callers that want their own precedence. A
chain keeps references to its members and never copies their data, so a base
chain can be shared while derived chains are built from it.
"""

from __future__ import annotations

from typing import Any, Iterator

from ..domain.path import MISSING
from ..observability import log_debug
from .ports import Source


class FallbackSource:
    """Query member sources in order and return the first hit.

    Examples
    --------
    >>> from lib_config_chain.domain.sources import FlatSource, TreeSource
    >>> base = FallbackSource(TreeSource({"mode": "file", "port": 80}))
    >>> chain = base.with_first(FlatSource({"mode": "args"}))
    >>> chain.resolve("mode"), chain.resolve("port")
    (('args', True), (80, True))
    >>> base.resolve("mode")
    ('file', True)
    >>> chain.resolve("missing")
    (None, False)
    """

    __slots__ = ("_sources",)

    def __init__(self, *sources: Source) -> None:
        self._sources: tuple[Source, ...] = tuple(sources)

    @property
    def sources(self) -> tuple[Source, ...]:
        """Member sources ordered from highest to lowest precedence."""

        return self._sources

    def resolve(self, key: str) -> tuple[Any, bool]:
        """Return the first ``(value, True)`` reported by a member source."""

        for index, source in enumerate(self._sources):
            value, found = source.resolve(key)
            if found:
                log_debug("chain_resolved", source="chain", key=key, index=index, member=type(source).__name__)
                return value, True
        log_debug("chain_missed", source="chain", key=key, members=len(self._sources))
        return MISSING

    def with_first(self, source: Source) -> FallbackSource:
        """Return a new chain consulting *source* before every existing member."""

        return FallbackSource(source, *self._sources)

    def with_last(self, source: Source) -> FallbackSource:
        """Return a new chain consulting *source* only after every existing member."""

        return FallbackSource(*self._sources, source)

    def __iter__(self) -> Iterator[Source]:
        return iter(self._sources)

    def __len__(self) -> int:
        return len(self._sources)

    def __repr__(self) -> str:
        members = ", ".join(type(source).__name__ for source in self._sources)
        return f"FallbackSource({members})"


def fallback(*sources: Source) -> FallbackSource:
    """Compose *sources* into a :class:`FallbackSource` (first wins)."""

    return FallbackSource(*sources)
