"""Public package surface for ``lib_config_chain``.

Re-exports the source factories, the fallback chain, the typed accessor, the
error taxonomy, and the logging hooks so consumers only need
``import lib_config_chain``.
"""

from __future__ import annotations

from .core import (
    ConfigAccessor,
    ConfigError,
    EnvSource,
    FallbackSource,
    FlatSource,
    InvalidFormat,
    MissingKey,
    NotFound,
    Source,
    TreeSource,
    TypeMismatch,
    fallback,
    from_args,
    from_env,
    from_file,
    from_flat,
    from_json,
    from_toml,
    from_tree,
    from_yaml,
    layered,
)
from .adapters.env.default import dot_to_snake
from .observability import bind_trace_id, get_logger

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
    "bind_trace_id",
    "dot_to_snake",
    "fallback",
    "from_args",
    "from_env",
    "from_file",
    "from_flat",
    "from_json",
    "from_toml",
    "from_tree",
    "from_yaml",
    "get_logger",
    "layered",
]
