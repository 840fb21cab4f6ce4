"""Event sink protocol for dynsink pipelines.

Every stage of a pipeline implements ``EventSink``: ``open``, ``append``
and ``close``.  A sink that has durably handled an event may forward it to a
downstream sink, which lets sinks be chained.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from dynsink.models.events import Event


@runtime_checkable
class EventSink(Protocol):
    """Protocol that every dynsink sink must implement."""

    def open(self) -> None:
        """Prepare the sink to receive events."""
        ...

    def append(self, event: Event) -> None:
        """Consume one event.  Errors propagate to the caller."""
        ...

    def close(self) -> None:
        """Release every resource the sink holds."""
        ...


class CollectingSink:
    """Downstream sink that keeps every event it receives, in order."""

    def __init__(self) -> None:
        self.events: list[Event] = []
        self.opened = False
        self.closed = False

    def open(self) -> None:
        self.opened = True

    def append(self, event: Event) -> None:
        self.events.append(event)

    def close(self) -> None:
        self.closed = True
