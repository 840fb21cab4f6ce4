"""``dynsink resolve`` — preview the destination a template yields for a tag set."""

from __future__ import annotations

import typer
from rich.console import Console

from dynsink.core.escaping import contains_tag, escape_string
from dynsink.models.events import Event

console = Console()


def _parse_tags(pairs: list[str]) -> dict[str, str]:
    tags: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected KEY=VALUE, got {pair!r}", param_hint="--tag")
        tags[key] = value
    return tags


def resolve_cmd(
    template: str = typer.Argument(..., help="Destination template to resolve."),
    tag: list[str] = typer.Option(
        None, "--tag", "-t", help="Event tag as KEY=VALUE; repeatable."
    ),
    host: str = typer.Option(None, "--host", help="Event host (defaults to this machine)."),
    body: str = typer.Option("", "--body", help="Event body."),
) -> None:
    """Print the destination TEMPLATE resolves to for the given tags."""
    fields: dict[str, object] = {"body": body.encode("utf-8"), "tags": _parse_tags(tag or [])}
    if host:
        fields["host"] = host
    event = Event(**fields)

    mode = "dynamic" if contains_tag(template) else "static"
    console.print(f"[dim]{mode}[/dim] {escape_string(template, event)}", highlight=False)
