"""Every source and decoder must satisfy the application-layer ports."""

from __future__ import annotations

import pytest

from lib_config_chain.application import ports
from lib_config_chain.application.accessor import ConfigAccessor
from lib_config_chain.application.chain import FallbackSource
from lib_config_chain.adapters.decoders.structured import DECODERS
from lib_config_chain.adapters.env.default import EnvSource, environ_lookup
from lib_config_chain.domain.sources import FlatSource, TreeSource

SOURCES = [
    TreeSource({"section": {"foo": "bar"}}),
    FlatSource({"section.foo": "bar"}),
    EnvSource(lookup=environ_lookup(environ={"section_foo": "bar"})),
    FallbackSource(FlatSource({"section.foo": "bar"})),
    ConfigAccessor(TreeSource({"section": {"foo": "bar"}})),
]


@pytest.mark.parametrize("source", SOURCES, ids=lambda s: type(s).__name__)
def test_source_contract(source: ports.Source) -> None:
    assert isinstance(source, ports.Source)
    assert source.resolve("section.foo") == ("bar", True)
    assert source.resolve("section.missing") == (None, False)


@pytest.mark.parametrize("suffix", sorted(DECODERS))
def test_decoder_contract(suffix: str) -> None:
    decoder = DECODERS[suffix]
    assert isinstance(decoder, ports.DocumentDecoder)
    assert decoder.format in {"json", "yaml", "toml"}
