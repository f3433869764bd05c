"""Main CLI entry point for xlsx-lookup."""

from __future__ import annotations

import logging
from typing import Optional

import typer

from xlsx_lookup import __version__


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"xlsx-lookup {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="xlsx-lookup",
    help="Indexed, cached worksheet lookups with JSON output.",
    no_args_is_help=True,
    pretty_exceptions_enable=False,
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log snapshot builds and cache decisions to stderr.",
    ),
) -> None:
    """Indexed, cached worksheet lookups with JSON output."""
    if verbose:
        # stderr keeps stdout reserved for JSON
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


def _register_commands() -> None:
    """Import and register all command modules."""
    from xlsx_lookup.commands import (
        cell,  # noqa: F401
        info,  # noqa: F401
        lookup,  # noqa: F401
    )


_register_commands()
