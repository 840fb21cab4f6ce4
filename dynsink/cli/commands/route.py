"""``dynsink route`` — route a JSON-lines event file through an escaped sink.

Each input line is one event object::

    {"body": "GET /index.html", "tags": {"host": "web-1"}, "priority": "INFO"}

Events are written to the destinations their tags select, and a summary
table of destinations and record counts is printed.
"""

from __future__ import annotations

from collections import Counter
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from dynsink.core.escaping import escape_string
from dynsink.models.events import Event
from dynsink.models.sink import RouteMode
from dynsink.routing.builder import ConfigurationError, build_escaped_sink
from dynsink.routing.escaped_sink import SinkCloseError
from dynsink.writers.local_file import LocalFileWriter
from dynsink.writers.memory import MemoryStorage

console = Console()


def _read_events(events_file: Path) -> list[Event]:
    events: list[Event] = []
    with events_file.open(encoding="utf-8") as fh:
        for lineno, line in enumerate(fh, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                events.append(Event.model_validate_json(line))
            except ValidationError as exc:
                console.print(f"[red]Invalid event on line {lineno}:[/red] {exc}")
                raise typer.Exit(code=1) from exc
    return events


def route_cmd(
    events_file: Path = typer.Argument(
        ..., exists=True, dir_okay=False, readable=True, help="JSON-lines file of events."
    ),
    destination: str = typer.Argument(
        ..., help="Destination template, e.g. 'logs/%{host}'."
    ),
    filename: str = typer.Option(
        "", "--filename", "-f", help="Filename template joined to the destination."
    ),
    output_format: str = typer.Option(
        None, "--format", help="Output format name (defaults to DYNSINK_DEFAULT_OUTPUT_FORMAT)."
    ),
    max_open: int = typer.Option(
        None, "--max-open", min=0, help="Ceiling on simultaneously open writers (0 = unbounded)."
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Route into memory instead of writing files."
    ),
) -> None:
    """Route every event in EVENTS_FILE to the destination its tags select."""
    events = _read_events(events_file)

    counts: Counter[str] = Counter()

    def _counting_resolver(template: str, event: Event) -> str:
        resolved = escape_string(template, event)
        counts[resolved] += 1
        return resolved

    storage = MemoryStorage()
    writer_factory = storage.writer if dry_run else LocalFileWriter
    args: list[str] = [destination, filename]
    if output_format:
        args.append(output_format)

    try:
        sink = build_escaped_sink(
            *args,
            writer_factory=writer_factory,
            resolver=_counting_resolver,
            max_open_writers=max_open,
        )
    except ConfigurationError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        raise typer.Exit(code=2) from exc

    try:
        sink.open()
        for event in events:
            sink.append(event)
    except (OSError, ValueError) as exc:
        console.print(f"[red]Routing failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    finally:
        try:
            sink.close()
        except (SinkCloseError, OSError) as exc:
            console.print(f"[red]Close failed:[/red] {exc}")

    report = sink.report()
    if report.mode is RouteMode.STATIC:
        counts[report.template] = report.events_appended

    table = Table(
        title=f"Routed {report.events_appended} event(s) ({report.mode.value})",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Destination", style="cyan")
    table.add_column("Records", justify="right", style="green")
    for dest, n in sorted(counts.items()):
        table.add_row(dest, str(n))

    console.print(table)
    console.print(
        f"[dim]Writers opened: {report.writers_opened}  "
        f"evicted: {report.writers_evicted}"
        f"{'  (dry run, nothing written)' if dry_run else ''}[/dim]"
    )
