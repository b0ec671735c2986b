"""Path tokenisation and single-step descent.

Covers the segment rules (empty segments preserved), the node classification
used for dispatch, and the index rules applied only to sequences.
"""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Mapping
from types import MappingProxyType

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_config_chain.domain.path import MISSING, NodeKind, classify, split_key, step, walk


@pytest.mark.parametrize(
    ("key", "segments"),
    [
        ("string", ("string",)),
        ("section.foo", ("section", "foo")),
        ("array.0.key", ("array", "0", "key")),
        ("a..b", ("a", "", "b")),
        (".a", ("", "a")),
        ("a.", ("a", "")),
        ("", ("",)),
    ],
)
def test_split_key_preserves_empty_segments(key: str, segments: tuple[str, ...]) -> None:
    assert split_key(key) == segments


@pytest.mark.parametrize(
    ("node", "kind"),
    [
        ({"a": 1}, NodeKind.MAPPING),
        ({}, NodeKind.MAPPING),
        (MappingProxyType({"a": 1}), NodeKind.MAPPING),
        (OrderedDict([("a", 1)]), NodeKind.MAPPING),
        ({1: "one"}, NodeKind.NON_STRING_MAPPING),
        ({"a": 1, True: 2}, NodeKind.NON_STRING_MAPPING),
        ([1, 2], NodeKind.SEQUENCE),
        ((1, 2), NodeKind.SEQUENCE),
        ("text", NodeKind.SCALAR),
        (b"bytes", NodeKind.SCALAR),
        (42, NodeKind.SCALAR),
        (3.5, NodeKind.SCALAR),
        (True, NodeKind.SCALAR),
        (None, NodeKind.SCALAR),
        ({1, 2}, NodeKind.SCALAR),
    ],
)
def test_classify(node: object, kind: NodeKind) -> None:
    assert classify(node) is kind


def test_step_mapping_hit_and_miss() -> None:
    assert step({"foo": "bar"}, "foo") == ("bar", True)
    assert step({"foo": "bar"}, "baz") == MISSING


def test_step_mapping_returns_none_values_as_found() -> None:
    assert step({"nothing": None}, "nothing") == (None, True)


def test_step_numeric_segment_is_a_key_for_mappings() -> None:
    assert step({"0": "zero"}, "0") == ("zero", True)
    assert step({"a": "b"}, "0") == MISSING


def test_step_non_string_mapping_uses_segment_verbatim() -> None:
    node = {1: "int-key", "name": "str-key"}
    assert step(node, "name") == ("str-key", True)
    assert step(node, "1") == MISSING


@pytest.mark.parametrize(
    ("segment", "expected"),
    [
        ("0", ("a", True)),
        ("2", ("c", True)),
        ("02", ("c", True)),
        ("3", MISSING),
        ("-1", MISSING),
        ("+1", MISSING),
        ("1.0", MISSING),
        (" 1", MISSING),
        ("x", MISSING),
        ("١", MISSING),
        ("9" * 5000, MISSING),
    ],
)
def test_step_sequence_index_rules(segment: str, expected: tuple[object, bool]) -> None:
    assert step(["a", "b", "c"], segment) == expected


@pytest.mark.parametrize("node", ["text", 1, None, True, 2.5])
def test_step_scalar_never_descends(node: object) -> None:
    assert step(node, "anything") == MISSING
    assert step(node, "0") == MISSING


@pytest.mark.parametrize("node", [{"": "empty"}, [1], "text", {1: 2}])
def test_step_empty_segment_always_fails(node: object) -> None:
    assert step(node, "") == MISSING


def test_walk_stops_at_first_failure() -> None:
    tree = {"array": [{"key": 1}, {"key": 2}]}
    assert walk(tree, "array.1.key") == (2, True)
    assert walk(tree, "array.5.key") == MISSING
    assert walk(tree, "array.0.key.deeper") == MISSING
    assert walk(tree, "array.key") == MISSING


def test_walk_returns_containers() -> None:
    tree = {"section": {"foo": ["x"]}}
    assert walk(tree, "section") == ({"foo": ["x"]}, True)
    assert walk(tree, "section.foo") == (["x"], True)


SEGMENT = st.text(alphabet="abc01", min_size=1, max_size=4)
LEAF = st.one_of(st.integers(), st.text(max_size=5), st.booleans(), st.none())


@given(st.lists(SEGMENT, min_size=1, max_size=5), LEAF)
def test_walk_finds_leaf_built_from_segments(segments: list[str], leaf: object) -> None:
    tree: object = leaf
    for segment in reversed(segments):
        tree = {segment: tree}
    assert walk(tree, ".".join(segments)) == (leaf, True)


@given(st.lists(SEGMENT, min_size=1, max_size=4), st.integers(min_value=0, max_value=3))
def test_walk_rejects_keys_with_empty_segment(segments: list[str], position: int) -> None:
    tree: object = "leaf"
    for segment in reversed(segments):
        tree = {segment: tree}
    broken = list(segments)
    broken.insert(min(position, len(broken)), "")
    assert walk(tree, ".".join(broken)) == MISSING


def test_walk_overlong_index_is_absent() -> None:
    assert walk({"array": [1, 2]}, "array." + "9" * 5000) == MISSING


class CountingMapping(Mapping):
    """Mapping that records how often its keys are iterated."""

    def __init__(self, data: dict[object, object]) -> None:
        self._data = data
        self.iterations = 0

    def __getitem__(self, key: object) -> object:
        return self._data[key]

    def __iter__(self):
        self.iterations += 1
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)


def test_step_does_not_scan_mapping_keys() -> None:
    node = CountingMapping({"a": 1, 2: "two"})
    assert step(node, "a") == (1, True)
    assert step(node, "2") == MISSING
    assert node.iterations == 0
    assert classify(node) is NodeKind.NON_STRING_MAPPING
