"""In-memory configuration sources.

Purpose
-------
Provide the two data-backed :class:`~lib_config_chain.application.ports.Source`
variants. Both hold a reference to already-decoded data and answer lookups as a
pure computation; neither copies nor mutates what it was given.

Contents
--------
* :class:`TreeSource` – walks dotted keys through nested mappings and
  sequences.
* :class:`FlatSource` – matches the whole dotted key against a flat mapping.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .path import MISSING, walk


@dataclass(frozen=True, slots=True)
class TreeSource:
    """Resolve dotted keys by descending through a decoded document tree.

    Parameters
    ----------
    tree:
        Root node produced by a decoder or built by hand. Normally a mapping,
        although any node is accepted.

    Examples
    --------
    >>> source = TreeSource({"section": {"foo": "bar"}, "array": [{"key": 1}]})
    >>> source.resolve("section.foo")
    ('bar', True)
    >>> source.resolve("array.0.key")
    (1, True)
    >>> source.resolve("section..foo")
    (None, False)
    """

    tree: Any

    def resolve(self, key: str) -> tuple[Any, bool]:
        """Walk *key* segment by segment; any failing segment fails the lookup."""

        return walk(self.tree, key)


@dataclass(frozen=True, slots=True)
class FlatSource:
    """Resolve keys verbatim against a flat mapping.

    Argument lists are materialised as ``{"section.foo": "bar"}``; the dotted
    key is therefore a literal mapping key here, not a path.

    Examples
    --------
    >>> FlatSource({"section.foo": "bar"}).resolve("section.foo")
    ('bar', True)
    >>> FlatSource({"section.foo": "bar"}).resolve("section")
    (None, False)
    """

    values: Mapping[str, Any]

    def resolve(self, key: str) -> tuple[Any, bool]:
        if key in self.values:
            return self.values[key], True
        return MISSING
