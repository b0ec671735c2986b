"""Structured document decoders.

Purpose
-------
Convert JSON, YAML, and TOML documents into the generic trees of mappings,
sequences, and scalars walked by
:class:`~lib_config_chain.domain.sources.TreeSource`. Decoders are thin
wrappers around ``json``, ``yaml.safe_load``, and ``tomllib`` so logging and
the top-level mapping check live in one place.

Contents
--------
* :class:`BaseDecoder` – reading documents from streams, bytes, text, or files.
* :class:`JSONDecoder` / :class:`YAMLDecoder` / :class:`TOMLDecoder`.
* :data:`DECODERS` – decoder instances keyed by file suffix.

Error Policy
------------
Parser exceptions (``json.JSONDecodeError``, ``yaml.YAMLError``,
``tomllib.TOMLDecodeError``) are logged and re-raised unchanged. A document
that parses but is not a mapping raises
:class:`~lib_config_chain.domain.errors.InvalidFormat`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import IO, Any, Mapping, Union

try:  # Python >= 3.11
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for <3.11
    import tomli as tomllib  # type: ignore[no-redef]

import yaml

from ...domain.errors import InvalidFormat, NotFound
from ...observability import log_debug, log_error

Document = Union[str, bytes, IO[str], IO[bytes]]


class BaseDecoder:
    """Shared helpers for the structured decoders."""

    format: str = ""

    def decode(self, document: Document) -> Mapping[Any, Any]:
        """Parse *document* and return its top-level mapping.

        Parameters
        ----------
        document:
            Text, bytes, or a readable (text or binary) stream.

        Side Effects
        ------------
        Emits ``document_decoded`` debug events or ``document_invalid`` error
        events.
        """

        origin = _origin_of(document)
        payload = _read_document(document)
        try:
            data = self._parse(payload)
        except self._errors() as exc:
            log_error("document_invalid", source=self.format, origin=origin, error=str(exc))
            raise
        result = self._ensure_mapping(data, origin=origin)
        log_debug("document_decoded", source=self.format, origin=origin, keys=len(result))
        return result

    def decode_file(self, path: str | Path) -> Mapping[Any, Any]:
        """Read *path* and decode it, raising :class:`NotFound` when it does not exist.

        Examples
        --------
        >>> JSONDecoder().decode_file("/nonexistent/config.json")
        Traceback (most recent call last):
        ...
        lib_config_chain.domain.errors.NotFound: Configuration file not found: /nonexistent/config.json
        """

        file_path = Path(path)
        if not file_path.is_file():
            raise NotFound(f"Configuration file not found: {path}")
        with file_path.open("rb") as stream:
            log_debug("config_file_read", source=self.format, origin=str(file_path))
            return self.decode(stream)

    def _parse(self, payload: str | bytes) -> Any:
        raise NotImplementedError

    def _errors(self) -> tuple[type[BaseException], ...]:
        raise NotImplementedError

    def _ensure_mapping(self, data: Any, *, origin: str | None) -> Mapping[Any, Any]:
        """Return *data* when it is a mapping, otherwise raise ``InvalidFormat``.

        Examples
        --------
        >>> JSONDecoder()._ensure_mapping({"key": 1}, origin="demo")
        {'key': 1}
        >>> JSONDecoder()._ensure_mapping([1], origin="demo")
        Traceback (most recent call last):
        ...
        lib_config_chain.domain.errors.InvalidFormat: json document demo did not produce a mapping
        """

        if not isinstance(data, Mapping):
            log_error("document_invalid", source=self.format, origin=origin, error="not a mapping")
            raise InvalidFormat(f"{self.format} document {origin or '<string>'} did not produce a mapping")
        return data


class JSONDecoder(BaseDecoder):
    """Decode JSON objects.

    Examples
    --------
    >>> JSONDecoder().decode('{"section": {"foo": "bar"}}')["section"]["foo"]
    'bar'
    """

    format = "json"

    def _parse(self, payload: str | bytes) -> Any:
        return json.loads(payload)

    def _errors(self) -> tuple[type[BaseException], ...]:
        return (json.JSONDecodeError, UnicodeDecodeError)


class YAMLDecoder(BaseDecoder):
    """Decode YAML mappings with ``yaml.safe_load``.

    An empty document decodes to an empty mapping. Keys keep the types PyYAML
    gives them, so ``1: one`` yields an integer key.

    Examples
    --------
    >>> YAMLDecoder().decode("array:\\n- key: 1\\n")["array"][0]["key"]
    1
    >>> YAMLDecoder().decode("")
    {}
    """

    format = "yaml"

    def _parse(self, payload: str | bytes) -> Any:
        data = yaml.safe_load(payload)
        return {} if data is None else data

    def _errors(self) -> tuple[type[BaseException], ...]:
        return (yaml.YAMLError,)


class TOMLDecoder(BaseDecoder):
    """Decode TOML documents with ``tomllib``.

    Examples
    --------
    >>> TOMLDecoder().decode('[service]\\nport = 8080\\n')["service"]["port"]
    8080
    """

    format = "toml"

    def _parse(self, payload: str | bytes) -> Any:
        text = payload.decode("utf-8") if isinstance(payload, bytes) else payload
        return tomllib.loads(text)

    def _errors(self) -> tuple[type[BaseException], ...]:
        return (tomllib.TOMLDecodeError, UnicodeDecodeError)


DECODERS: dict[str, BaseDecoder] = {
    ".json": JSONDecoder(),
    ".yaml": YAMLDecoder(),
    ".yml": YAMLDecoder(),
    ".toml": TOMLDecoder(),
}
"""Decoders keyed by lower-case file suffix."""


def decoder_for(path: str | Path) -> BaseDecoder:
    """Return the decoder registered for the suffix of *path*.

    Examples
    --------
    >>> decoder_for("settings.YML").format
    'yaml'
    >>> decoder_for("settings.ini")
    Traceback (most recent call last):
    ...
    lib_config_chain.domain.errors.InvalidFormat: Unsupported configuration format: settings.ini
    """

    try:
        return DECODERS[Path(path).suffix.lower()]
    except KeyError as exc:
        raise InvalidFormat(f"Unsupported configuration format: {path}") from exc


def _read_document(document: Document) -> str | bytes:
    """Return the raw payload of *document*, draining it when it is a stream."""

    if isinstance(document, (str, bytes)):
        return document
    return document.read()


def _origin_of(document: Document) -> str | None:
    """Return a stream's ``name`` for diagnostics, ``None`` for in-memory text."""

    name = getattr(document, "name", None)
    return str(name) if name is not None else None
