"""Writer protocol for dynsink destinations.

A writer is bound to exactly one concrete destination for its whole life and
exposes ``open``, ``append`` and ``close``.  Any of the three may raise
``OSError``; sinks propagate those errors rather than retrying.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable


@runtime_checkable
class Writer(Protocol):
    """Protocol that every dynsink writer must implement.

    Attributes
    ----------
    path : str
        The resolved destination this writer is bound to.
    """

    @property
    def path(self) -> str:
        """Return the destination this writer appends to."""
        ...

    def open(self) -> None:
        """Acquire the underlying storage handle.  May block on I/O."""
        ...

    def append(self, data: bytes) -> None:
        """Append one serialized record."""
        ...

    def close(self) -> None:
        """Flush and release the storage handle."""
        ...


WriterFactory = Callable[[str], Writer]
"""Builds an unopened writer for a resolved destination."""


class WriterStateError(OSError):
    """Raised when a writer is used outside its open/close window."""
