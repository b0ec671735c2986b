"""Composition root for ``lib_config_chain``.

Purpose
-------
Provide the factory functions consumers call to obtain configuration sources
from in-memory data, documents, argument lists, and the environment, plus
:func:`layered`, which wires them into the conventional precedence chain.

Contents
--------
* :func:`from_tree` / :func:`from_flat` – wrap already-decoded data.
* :func:`from_json` / :func:`from_yaml` / :func:`from_toml` – decode a document
  eagerly and return a tree source.
* :func:`from_file` – pick a decoder by file suffix.
* :func:`from_args` – parse ``--key=value`` arguments into a flat source.
* :func:`from_env` – environment source with optional prefix and injectable
  environment.
* :func:`fallback` – compose sources, first wins.
* :func:`layered` – ``args`` > ``env`` > files > trees.

System Role
-----------
All I/O happens here and in the decoders, exactly once, before a source
exists. Every source returned is immutable and answers lookups without further
I/O.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Iterable, Mapping

from .adapters.args.default import parse_args
from .adapters.decoders.structured import Document, JSONDecoder, TOMLDecoder, YAMLDecoder, decoder_for
from .adapters.env.default import EnvSource, dot_to_snake, environ_lookup, environ_names
from .application.accessor import ConfigAccessor
from .application.chain import FallbackSource, fallback
from .application.ports import EnvLookup, EnvNames, Source
from .domain.errors import ConfigError, InvalidFormat, MissingKey, NotFound, TypeMismatch
from .domain.sources import FlatSource, TreeSource
from .observability import log_debug, log_info, make_event

_JSON = JSONDecoder()
_YAML = YAMLDecoder()
_TOML = TOMLDecoder()


def from_tree(tree: Mapping[Any, Any]) -> TreeSource:
    """Wrap a nested mapping so dotted keys walk into it.

    Examples
    --------
    >>> from_tree({"section": {"foo": "bar"}}).resolve("section.foo")
    ('bar', True)
    """

    return TreeSource(tree)


def from_flat(values: Mapping[str, Any]) -> FlatSource:
    """Wrap a flat mapping whose keys are matched verbatim."""

    return FlatSource(values)


def from_json(document: Document) -> TreeSource:
    """Decode a JSON object from text, bytes, or a stream.

    Examples
    --------
    >>> from_json('{"array": [{"key": 1}, {"key": 2}]}').resolve("array.1.key")
    (2, True)
    """

    return TreeSource(_JSON.decode(document))


def from_yaml(document: Document) -> TreeSource:
    """Decode a YAML mapping from text, bytes, or a stream.

    Examples
    --------
    >>> from_yaml("section:\\n  foo: bar\\n").resolve("section.foo")
    ('bar', True)
    """

    return TreeSource(_YAML.decode(document))


def from_toml(document: Document) -> TreeSource:
    """Decode a TOML document from text, bytes, or a stream."""

    return TreeSource(_TOML.decode(document))


def from_file(path: str | Path) -> TreeSource:
    """Decode the file at *path* using the decoder registered for its suffix.

    Raises
    ------
    NotFound
        When *path* does not exist.
    InvalidFormat
        When the suffix is unknown or the document is not a mapping.
    """

    return TreeSource(decoder_for(path).decode_file(path))


def from_args(args: Iterable[str]) -> FlatSource:
    """Parse ``--key=value`` arguments into a flat source.

    Examples
    --------
    >>> from_args(["--section.foo=bar"]).resolve("section.foo")
    ('bar', True)
    """

    return FlatSource(parse_args(args))


def from_env(
    prefix: str | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    lookup: EnvLookup | None = None,
    names: EnvNames | None = None,
    convert: Callable[[str], str] = dot_to_snake,
) -> EnvSource:
    """Build an environment source.

    Parameters
    ----------
    prefix:
        Prepended verbatim to each transliterated key by the default lookup.
    environ:
        Mapping used instead of :data:`os.environ`.
    lookup / names:
        Fully custom lookup and enumeration functions; when given, *prefix*
        and *environ* are ignored.
    convert:
        Key transliteration applied before the lookup, :func:`dot_to_snake`
        by default.

    Examples
    --------
    >>> source = from_env("APP_", environ={"APP_section_foo": "bar"})
    >>> source.resolve("section.foo")
    ('bar', True)
    """

    if lookup is None:
        lookup = environ_lookup(prefix, environ)
        if names is None:
            names = environ_names(prefix, environ)
    return EnvSource(lookup=lookup, names=names, convert=convert)


def layered(
    *,
    args: Iterable[str] | None = None,
    env: bool = True,
    env_prefix: str | None = None,
    environ: Mapping[str, str] | None = None,
    files: Iterable[str | Path] = (),
    trees: Iterable[Mapping[Any, Any]] = (),
) -> FallbackSource:
    """Assemble the conventional precedence chain.

    Precedence, highest first: command-line *args*, the environment (when
    *env* is true), each of *files* in the order given, then each of the
    in-memory *trees* (typically built-in defaults).

    Missing files are skipped; unreadable or malformed files raise.

    Examples
    --------
    >>> chain = layered(
    ...     args=["--service.port=9000"],
    ...     environ={"service_host": "env-host"},
    ...     trees=[{"service": {"port": 80, "host": "localhost", "name": "demo"}}],
    ... )
    >>> chain.resolve("service.port"), chain.resolve("service.host"), chain.resolve("service.name")
    (('9000', True), ('env-host', True), ('demo', True))
    """

    sources: list[Source] = []
    if args is not None:
        sources.append(from_args(args))
    if env:
        sources.append(from_env(env_prefix, environ=environ))
    for path in files:
        try:
            sources.append(from_file(path))
        except NotFound:
            log_debug("config_file_missing", **make_event("file", str(path)))
            continue
    sources.extend(from_tree(tree) for tree in trees)
    chain = fallback(*sources)
    log_info("chain_built", **make_event("chain", None, {"members": [type(s).__name__ for s in sources]}))
    return chain


__all__ = [
    "ConfigAccessor",
    "ConfigError",
    "EnvSource",
    "FallbackSource",
    "FlatSource",
    "InvalidFormat",
    "MissingKey",
    "NotFound",
    "Source",
    "TreeSource",
    "TypeMismatch",
    "fallback",
    "from_args",
    "from_env",
    "from_file",
    "from_flat",
    "from_json",
    "from_toml",
    "from_tree",
    "from_yaml",
    "layered",
]
