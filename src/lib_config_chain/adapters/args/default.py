"""Command-line argument adapter.

Purpose
-------
Turn ``--section.foo=bar`` style argument lists into a flat mapping keyed by the
literal dotted name, ready for
:class:`~lib_config_chain.domain.sources.FlatSource`.

Rules
-----
* The bare token ``--`` is ignored.
* Every leading ``-`` is stripped, then the entry is split at the first ``=``.
* An entry without ``=`` is malformed and raises
  :class:`~lib_config_chain.domain.errors.InvalidFormat`.
* A later entry for the same key replaces an earlier one.
"""

from __future__ import annotations

from typing import Iterable

from ...domain.errors import InvalidFormat
from ...observability import log_debug, log_error

ARGUMENT_TERMINATOR = "--"


def parse_args(args: Iterable[str]) -> dict[str, str]:
    """Return the ``key -> value`` assignments spelled by *args*.

    Examples
    --------
    >>> parse_args(["--section.foo=bar", "--", "-level=a=b", "empty="])
    {'section.foo': 'bar', 'level': 'a=b', 'empty': ''}
    >>> parse_args(["notanassignment"])
    Traceback (most recent call last):
    ...
    lib_config_chain.domain.errors.InvalidFormat: expected assignment, got: notanassignment
    """

    assignments: dict[str, str] = {}
    for arg in args:
        if arg == ARGUMENT_TERMINATOR:
            continue
        name, sep, value = arg.lstrip("-").partition("=")
        if not sep:
            log_error("argument_invalid", source="args", origin=None, argument=arg)
            raise InvalidFormat(f"expected assignment, got: {arg}")
        assignments[name] = value
    log_debug("arguments_parsed", source="args", origin=None, keys=sorted(assignments))
    return assignments
