"""Output format protocol and shared stream state."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from dynsink.models.events import Event


@runtime_checkable
class OutputFormat(Protocol):
    """Serializes events into the bytes appended to one destination.

    Instances keep per-stream state and must never be shared between two
    writers.
    """

    @property
    def format_name(self) -> str:
        """The registry name this format was built from."""
        ...

    def format(self, event: Event) -> bytes:
        """Encode *event* as one record."""
        ...


class StreamFormat:
    """Base class tracking how many records a stream has produced."""

    format_name = "abstract"

    def __init__(self) -> None:
        self.records_written = 0

    def format(self, event: Event) -> bytes:
        data = self.encode(event)
        self.records_written += 1
        return data

    def encode(self, event: Event) -> bytes:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.format_name} records={self.records_written}>"
