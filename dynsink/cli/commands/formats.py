"""``dynsink formats`` — list registered output formats."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from dynsink.config import config
from dynsink.formats.registry import default_registry

console = Console()


def formats_cmd() -> None:
    """List the output formats available to sinks."""
    table = Table(title="Output Formats")
    table.add_column("Name", style="cyan")
    table.add_column("Default", justify="center")
    table.add_column("Class")

    for name in default_registry.names():
        instance = default_registry.resolve(name)
        is_default = "[green]Yes[/green]" if name == config.default_output_format else ""
        table.add_row(name, is_default, type(instance).__name__)

    console.print(table)
