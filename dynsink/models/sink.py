"""Sink configuration and reporting models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from dynsink.models.formats import OutputFormatSpec


class RouteMode(str, Enum):
    """Whether a sink's template depends on event content."""

    STATIC = "static"
    DYNAMIC = "dynamic"


class SinkConfig(BaseModel):
    """Construction options for an escaped sink.

    ``format_spec`` of ``None`` means "use the process default format".
    """

    model_config = ConfigDict(frozen=True)

    destination_template: str
    filename_template: str = ""
    format_spec: OutputFormatSpec | None = None

    @property
    def absolute_template(self) -> str:
        """Destination and filename joined with a single ``/``."""
        path = self.destination_template
        if self.filename_template:
            if not path.endswith("/"):
                path += "/"
            path += self.filename_template
        return path


class SinkReport(BaseModel):
    """Point-in-time counters for a sink."""

    model_config = ConfigDict(frozen=True)

    mode: RouteMode
    template: str
    events_appended: int = 0
    writers_opened: int = 0
    writers_evicted: int = 0
    open_destinations: list[str] = []
    eviction_failures: list[str] = []
