"""Dotted-path tokenisation and single-step container descent.

Purpose
-------
Hold the pure algorithms that turn ``"section.array.0.key"`` into segments and
walk one segment into a decoded configuration tree. Nothing in this module
performs I/O or logging; callers receive ``(value, found)`` pairs and never an
exception for a path that does not exist.

Contents
--------
* :func:`split_key` – split a key into segments, keeping empty ones.
* :class:`NodeKind` – closed enumeration of the node shapes a tree may hold.
* :func:`classify` – map an arbitrary decoded value onto :class:`NodeKind`.
* :func:`step` – descend from a node by one segment.
* :func:`walk` – apply :func:`step` for every segment of a key.

System Role
-----------
Used by :class:`lib_config_chain.domain.sources.TreeSource`. The node kind of
the *current* value decides how a segment is read: ``"0"`` is a key for a
mapping and an index only for a sequence.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any

SEPARATOR = "."
"""Literal separator between segments; there is no escape mechanism."""

MISSING: tuple[None, bool] = (None, False)
"""Canonical "not found" result shared by every resolver."""


class NodeKind(Enum):
    """Shapes a node in a decoded configuration tree can take."""

    MAPPING = "mapping"
    NON_STRING_MAPPING = "non_string_mapping"
    SEQUENCE = "sequence"
    SCALAR = "scalar"


def split_key(key: str) -> tuple[str, ...]:
    """Split *key* on ``.`` preserving empty segments.

    Empty segments are kept so that malformed keys are rejected during the walk
    instead of being silently reinterpreted.

    Examples
    --------
    >>> split_key("section.array.0.key")
    ('section', 'array', '0', 'key')
    >>> split_key("a..b")
    ('a', '', 'b')
    >>> split_key("")
    ('',)
    """

    return tuple(key.split(SEPARATOR))


def classify(node: Any) -> NodeKind:
    """Return the :class:`NodeKind` of *node*.

    Strings and bytes are scalars even though they are sequences. A mapping is
    a :attr:`NodeKind.MAPPING` when all of its keys are strings; PyYAML may
    produce integer, boolean, or ``None`` keys, which makes it a
    :attr:`NodeKind.NON_STRING_MAPPING`.

    Examples
    --------
    >>> classify({"a": 1}).name, classify({1: "a"}).name
    ('MAPPING', 'NON_STRING_MAPPING')
    >>> classify([1, 2]).name, classify("text").name, classify(None).name
    ('SEQUENCE', 'SCALAR', 'SCALAR')
    """

    kind = _container_kind(node)
    if kind is NodeKind.MAPPING and not all(isinstance(key, str) for key in node):
        return NodeKind.NON_STRING_MAPPING
    return kind


def step(node: Any, segment: str) -> tuple[Any, bool]:
    """Descend from *node* by one *segment*.

    Returns
    -------
    tuple[Any, bool]
        ``(child, True)`` when the segment addresses a child, otherwise
        :data:`MISSING`.

    Examples
    --------
    >>> step({"foo": "bar"}, "foo")
    ('bar', True)
    >>> step(["a", "b"], "1")
    ('b', True)
    >>> step(["a", "b"], "2")
    (None, False)
    >>> step({"0": "zero"}, "0")
    ('zero', True)
    >>> step("scalar", "x")
    (None, False)
    """

    if not segment:
        return MISSING
    kind = _container_kind(node)
    if kind is NodeKind.MAPPING or kind is NodeKind.NON_STRING_MAPPING:
        return _lookup_key(node, segment)
    if kind is NodeKind.SEQUENCE:
        return _lookup_index(node, segment)
    if kind is NodeKind.SCALAR:
        return MISSING
    raise AssertionError(f"unhandled node kind: {kind}")  # pragma: no cover


def walk(root: Any, key: str) -> tuple[Any, bool]:
    """Resolve every segment of *key* starting at *root*.

    The walk stops at the first failing segment; there is no partial result.

    Examples
    --------
    >>> walk({"array": [{"key": 1}, {"key": 2}]}, "array.0.key")
    (1, True)
    >>> walk({"array": [{"key": 1}]}, "array.5.key")
    (None, False)
    >>> walk({"a": {"b": 1}}, "a.")
    (None, False)
    """

    current = root
    for segment in split_key(key):
        current, found = step(current, segment)
        if not found:
            return MISSING
    return current, True


def _container_kind(node: Any) -> NodeKind:
    """Return the kind of *node* without inspecting mapping keys.

    Both mapping kinds are looked up the same way, so descent reports every
    mapping as :attr:`NodeKind.MAPPING` and keeps each step independent of the
    number of keys.
    """

    if isinstance(node, Mapping):
        return NodeKind.MAPPING
    if isinstance(node, Sequence) and not isinstance(node, (str, bytes, bytearray)):
        return NodeKind.SEQUENCE
    return NodeKind.SCALAR


def _lookup_key(node: Mapping[Any, Any], segment: str) -> tuple[Any, bool]:
    """Look *segment* up as a mapping key without coercing it."""

    if segment in node:
        return node[segment], True
    return MISSING


def _lookup_index(node: Sequence[Any], segment: str) -> tuple[Any, bool]:
    """Read *segment* as a base-10 index into *node* and bounds check it."""

    index = _parse_index(segment)
    if index is None or index >= len(node):
        return MISSING
    return node[index], True


def _parse_index(segment: str) -> int | None:
    """Return the non-negative integer spelled by *segment* or ``None``.

    Only ASCII digits are accepted; signs, whitespace, and other Unicode digits
    are rejected, as are segments longer than ``int`` will convert.

    Examples
    --------
    >>> _parse_index("12"), _parse_index("-1"), _parse_index("1.0"), _parse_index("+1")
    (12, None, None, None)
    """

    if not (segment.isascii() and segment.isdigit()):
        return None
    try:
        return int(segment)
    except ValueError:
        return None
