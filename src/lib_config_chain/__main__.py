"""``python -m lib_config_chain`` entry point; runs the CLI and exits with its code."""

from __future__ import annotations

import sys

from .cli import main

if __name__ == "__main__":  # pragma: no cover - exercised via python -m
    sys.exit(main(sys.argv[1:]))
