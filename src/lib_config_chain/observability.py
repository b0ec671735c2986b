"""Structured logging helpers shared by adapters and the composition root.

Purpose
    Keep every diagnostic emitted while building or querying configuration
    sources predictable and ready for aggregation, without imposing a logging
    backend on host applications.

Contents
    - ``TRACE_ID``: context variable carrying the active trace identifier.
    - ``get_logger``: the package logger (silent until a handler is attached).
    - ``bind_trace_id``: bind or clear the active trace identifier.
    - ``log_debug`` / ``log_info`` / ``log_error``: emit structured records.
    - ``make_event``: build the ``source``/``origin`` payload used by events.

System Integration
    Decoders, the argument parser, the fallback chain, and ``core`` log through
    these helpers. The pure modules under ``domain`` never log.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any, Final, Mapping

TRACE_ID: ContextVar[str | None] = ContextVar("lib_config_chain_trace_id", default=None)
"""Trace identifier attached to every record emitted by this package."""

_LOGGER: Final[logging.Logger] = logging.getLogger("lib_config_chain")
_LOGGER.addHandler(logging.NullHandler())


def get_logger() -> logging.Logger:
    """Expose the package logger so applications may attach handlers."""

    return _LOGGER


def bind_trace_id(trace_id: str | None) -> None:
    """Bind or clear the active trace identifier.

    Examples
    --------
    >>> bind_trace_id("req-7")
    >>> TRACE_ID.get()
    'req-7'
    >>> bind_trace_id(None)
    >>> TRACE_ID.get() is None
    True
    """

    TRACE_ID.set(trace_id)


def log_debug(message: str, **fields: Any) -> None:
    """Emit a structured debug record that includes the trace context."""

    _emit(logging.DEBUG, message, fields)


def log_info(message: str, **fields: Any) -> None:
    """Emit a structured info record that includes the trace context."""

    _emit(logging.INFO, message, fields)


def log_error(message: str, **fields: Any) -> None:
    """Emit a structured error record that includes the trace context."""

    _emit(logging.ERROR, message, fields)


def make_event(
    source: str,
    origin: str | None,
    payload: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Build the payload for a source lifecycle event.

    Inputs
        source: Kind of source involved (``"json"``, ``"args"``, ``"chain"``...).
        origin: File path or stream name the data came from, if any.
        payload: Optional extra diagnostic fields.

    Examples
    --------
    >>> make_event("yaml", "/etc/demo.yaml", {"keys": 3})
    {'source': 'yaml', 'origin': '/etc/demo.yaml', 'keys': 3}
    """

    event: dict[str, Any] = {"source": source, "origin": origin}
    if payload:
        event |= dict(payload)
    return event


def _emit(level: int, message: str, fields: Mapping[str, Any]) -> None:
    """Send a record through the package logger with the trace context attached."""

    if not _LOGGER.isEnabledFor(level):
        return
    context = {"trace_id": TRACE_ID.get()}
    context.update(fields)
    _LOGGER.log(level, message, extra={"context": context})
