"""CLI adapter for ``lib_config_chain`` built on ``lib_cli_exit_tools``.

Purpose
-------
Let operators check which value a dotted key resolves to, given a stack of
files, environment variables, and ``--set`` overrides, without writing Python.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command wiring traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata.
* :func:`cli_env_name` – shows the environment variable a key maps to.
* :func:`cli_get` – resolves a key through :func:`lib_config_chain.core.layered`.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
Outermost layer: calls the composition root and never reaches into adapters.
``lib_cli_exit_tools`` owns the exit code strategy.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Mapping
from importlib import metadata
from pathlib import Path
from typing import Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .adapters.env.default import dot_to_snake
from .core import layered
from .domain.errors import MissingKey

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000
_DISTRIBUTION: Final[str] = "lib_config_chain"


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` when not installed."""

    try:
        return metadata.version(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Resolve dotted configuration keys across files, environment, and arguments",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name=_DISTRIBUTION,
    message="lib_config_chain version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command storing the traceback preference for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        click.echo(f"{_DISTRIBUTION} (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', _DISTRIBUTION)}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("env-name", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("key")
@click.option("--prefix", default="", help="Prefix prepended to the variable name")
def cli_env_name(key: str, prefix: str) -> None:
    """Print the environment variable name that *key* is looked up under.

    Examples
    --------
    >>> from click.testing import CliRunner
    >>> CliRunner().invoke(cli, ["env-name", "service.port", "--prefix", "APP_"]).output.strip()
    'APP_service_port'
    """

    click.echo(prefix + dot_to_snake(key))


@cli.command("get", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("key")
@click.option(
    "--file",
    "files",
    multiple=True,
    type=click.Path(path_type=Path, dir_okay=False),
    help="JSON/YAML/TOML file to read (repeatable, earlier files win)",
)
@click.option(
    "--set",
    "overrides",
    multiple=True,
    metavar="KEY=VALUE",
    help="Override with the highest precedence (repeatable)",
)
@click.option("--env/--no-env", default=True, help="Consult environment variables", show_default=True)
@click.option("--env-prefix", default=None, help="Prefix for environment variable names")
@click.option("--json/--no-json", "as_json", default=False, help="JSON encode scalar values too (containers are always JSON)")
def cli_get(
    key: str,
    files: Sequence[Path],
    overrides: Sequence[str],
    env: bool,
    env_prefix: Optional[str],
    as_json: bool,
) -> None:
    """Resolve *key* and print its value.

    Precedence: ``--set`` overrides, then the environment, then each ``--file``
    in order. Containers and null values print as JSON; ``--json`` encodes
    scalars too. An unresolvable key fails with :class:`MissingKey`.
    """

    chain = layered(
        args=list(overrides),
        env=env,
        env_prefix=env_prefix,
        files=[str(path) for path in files],
    )
    value, found = chain.resolve(key)
    if not found:
        raise MissingKey(key)
    click.echo(_render(value, as_json=as_json))


def _render(value: object, *, as_json: bool) -> str:
    """Return *value* as printed by ``get``.

    Strings, numbers, and booleans print as-is; containers and ``None`` are
    always JSON encoded so the output stays machine readable.

    Examples
    --------
    >>> _render("demo", as_json=False), _render({"port": 8080}, as_json=False), _render(None, as_json=False)
    ('demo', '{"port": 8080}', 'null')
    >>> _render("demo", as_json=True)
    '"demo"'
    """

    if as_json or value is None or isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, ensure_ascii=False, default=str)
    return str(value)


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name=_DISTRIBUTION,
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
