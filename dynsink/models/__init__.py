"""Dynsink data models — all Pydantic v2, all frozen (immutable)."""

from dynsink.models.events import Event, Priority
from dynsink.models.formats import OutputFormatSpec
from dynsink.models.sink import RouteMode, SinkConfig, SinkReport

__all__ = [
    # events
    "Event",
    "Priority",
    # formats
    "OutputFormatSpec",
    # sink
    "RouteMode",
    "SinkConfig",
    "SinkReport",
]
