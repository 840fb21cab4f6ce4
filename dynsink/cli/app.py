"""Main Typer application — imports and registers all CLI commands.

Entry point: ``dynsink`` (configured via pyproject.toml [project.scripts]).
"""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from dynsink.cli.commands.formats import formats_cmd
from dynsink.cli.commands.resolve import resolve_cmd
from dynsink.cli.commands.route import route_cmd
from dynsink.config import config

app = typer.Typer(
    name="dynsink",
    help="Dynsink: route tagged events to templated destinations.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


def configure_logging(level: str) -> None:
    """Send library logs through Rich at *level*."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        config.log_level, "--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)."
    ),
) -> None:
    """Dynsink command-line interface."""
    configure_logging(log_level)


# Register subcommands
app.command(name="route", help="Route a JSON-lines event file to templated destinations.")(route_cmd)
app.command(name="resolve", help="Show the destination a template resolves to.")(resolve_cmd)
app.command(name="formats", help="List registered output formats.")(formats_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
