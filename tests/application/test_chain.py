from __future__ import annotations

import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_config_chain.application.chain import FallbackSource, fallback
from lib_config_chain.domain.sources import FlatSource, TreeSource


class RecordingSource:
    """Source double that records every key it is asked for."""

    def __init__(self, values: dict[str, object]) -> None:
        self.values = values
        self.calls: list[str] = []

    def resolve(self, key: str) -> tuple[object, bool]:
        self.calls.append(key)
        if key in self.values:
            return self.values[key], True
        return None, False


def test_first_hit_wins() -> None:
    chain = fallback(FlatSource({"mode": "args"}), TreeSource({"mode": "file", "port": 80}))
    assert chain.resolve("mode") == ("args", True)
    assert chain.resolve("port") == (80, True)


def test_all_missing_reports_absence() -> None:
    chain = fallback(FlatSource({}), TreeSource({}))
    assert chain.resolve("anything") == (None, False)


def test_empty_chain_reports_absence() -> None:
    assert FallbackSource().resolve("key") == (None, False)


def test_short_circuits_after_first_hit() -> None:
    first = RecordingSource({"key": "first"})
    second = RecordingSource({"key": "second"})
    assert fallback(first, second).resolve("key") == ("first", True)
    assert first.calls == ["key"]
    assert second.calls == []


def test_found_none_is_a_hit() -> None:
    chain = fallback(TreeSource({"key": None}), TreeSource({"key": "later"}))
    assert chain.resolve("key") == (None, True)


def test_with_first_takes_precedence_without_mutating_receiver() -> None:
    base = fallback(TreeSource({"mode": "file"}))
    derived = base.with_first(FlatSource({"mode": "override"}))
    assert derived.resolve("mode") == ("override", True)
    assert base.resolve("mode") == ("file", True)
    assert len(base) == 1 and len(derived) == 2


def test_with_last_is_pure_fallback() -> None:
    base = fallback(TreeSource({"mode": "file"}))
    derived = base.with_last(FlatSource({"mode": "ignored", "extra": "x"}))
    assert derived.resolve("mode") == ("file", True)
    assert derived.resolve("extra") == ("x", True)
    assert base.resolve("extra") == (None, False)


def test_chains_nest() -> None:
    inner = fallback(FlatSource({"a": 1}))
    outer = fallback(inner, FlatSource({"a": 2, "b": 3}))
    assert outer.resolve("a") == (1, True)
    assert outer.resolve("b") == (3, True)


def test_members_are_shared_not_copied() -> None:
    member = TreeSource({"a": 1})
    chain = fallback(member).with_last(FlatSource({}))
    assert chain.sources[0] is member
    assert list(chain) == list(chain.sources)


def test_resolution_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="lib_config_chain")
    chain = fallback(FlatSource({}), FlatSource({"key": "v"}))
    chain.resolve("key")
    chain.resolve("other")
    messages = [(r.getMessage(), getattr(r, "context")) for r in caplog.records]
    hit = next(ctx for msg, ctx in messages if msg == "chain_resolved")
    assert hit["key"] == "key" and hit["index"] == 1
    assert any(msg == "chain_missed" for msg, _ in messages)


KEYS = st.sampled_from(["a", "b", "c.d", "e"])
LAYER = st.dictionaries(KEYS, st.integers(), max_size=4)


@given(st.lists(LAYER, min_size=1, max_size=5), KEYS)
def test_chain_matches_first_layer_holding_key(layers: list[dict[str, int]], key: str) -> None:
    chain = fallback(*(FlatSource(layer) for layer in layers))
    expected = next(((layer[key], True) for layer in layers if key in layer), (None, False))
    assert chain.resolve(key) == expected


@given(st.lists(LAYER, min_size=1, max_size=4), LAYER, KEYS)
def test_extending_never_changes_receiver(layers: list[dict[str, int]], extra: dict[str, int], key: str) -> None:
    base = fallback(*(FlatSource(layer) for layer in layers))
    before = base.resolve(key)
    base.with_first(FlatSource(extra))
    base.with_last(FlatSource(extra))
    assert base.resolve(key) == before
