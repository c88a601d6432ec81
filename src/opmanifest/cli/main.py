"""opmanifest CLI entrypoint."""

from __future__ import annotations

import logging

import typer

app = typer.Typer(
    name="opmanifest",
    add_completion=False,
    no_args_is_help=True,
    help="Write operator packages as operator-registry manifest trees.",
)


@app.callback()
def _callback(
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        envvar="OPMANIFEST_LOG_LEVEL",
        help="Logging level (DEBUG, INFO, WARNING, ERROR).",
    ),
) -> None:
    """opmanifest CLI."""
    level = logging.getLevelName(log_level.strip().upper())
    if not isinstance(level, int):
        raise typer.BadParameter(f"unknown log level {log_level!r}", param_hint="--log-level")
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@app.command("version")
def version() -> None:
    """Print the installed opmanifest version."""
    from opmanifest import __version__

    typer.echo(__version__)


def _register_commands() -> None:
    """Register CLI subcommands.

    Importing these modules must remain lightweight so `opmanifest --help` is fast.
    """
    from opmanifest.cli.commands import build as build_cmd
    from opmanifest.cli.commands import check as check_cmd

    build_cmd.register(app)
    check_cmd.register(app)


_register_commands()
