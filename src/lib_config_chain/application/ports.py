"""Application-layer ports describing the contracts between layers.

Purpose
-------
Define the structural contracts every configuration backend and document
decoder satisfies so the composition root and consumers can work against
abstractions rather than concrete classes.

Contents
--------
* :class:`Source` – resolve a dotted key to ``(value, found)``.
* :class:`DocumentDecoder` – turn a text/binary document into a generic tree.
* :data:`EnvLookup` / :data:`EnvNames` – callables injected into the
  environment source in place of direct ``os.environ`` access.

System Role
-----------
These protocols keep dependency inversion enforceable: the fallback chain and
typed accessor only ever talk to :class:`Source`, and the composition root only
talks to :class:`DocumentDecoder`.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, Protocol, runtime_checkable

EnvLookup = Callable[[str], tuple[str | None, bool]]
"""``lookup(name) -> (value, found)``; mirrors ``os.environ`` membership."""

EnvNames = Callable[[], Iterable[str]]
"""Enumerate variable names visible to an :data:`EnvLookup`."""


@runtime_checkable
class Source(Protocol):
    """Resolve dotted keys against one configuration backend.

    Why
    ----
    Nested documents, argument lists, and the process environment answer the
    same question in different ways. A single method lets them be composed
    into fallback chains and wrapped by the typed accessor.

    Absence is a normal outcome and is reported as ``(None, False)``; it is
    never raised.
    """

    def resolve(self, key: str) -> tuple[Any, bool]:
        """Return ``(value, True)`` for a known *key*, otherwise ``(None, False)``."""


@runtime_checkable
class DocumentDecoder(Protocol):
    """Decode a structured document into a mapping of generic values.

    Why
    ----
    Keeps JSON/YAML/TOML parsing outside of the path resolver, which only ever
    sees the resulting tree of mappings, sequences, and scalars.
    """

    format: str

    def decode(self, document: Any) -> Mapping[Any, Any]:
        """Parse *document* (text, bytes, or a readable stream) into a mapping."""
