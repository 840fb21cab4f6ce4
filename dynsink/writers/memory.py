"""In-memory writers — capture routed records without touching storage.

Used by ``dynsink route --dry-run`` and handy in tests.  Every writer built
from one ``MemoryStorage`` appends into that storage, keyed by destination.
"""

from __future__ import annotations

from collections import defaultdict

from dynsink.writers import WriterStateError


class MemoryStorage:
    """Shared record buffer for ``MemoryWriter`` instances.

    Examples
    --------
    >>> storage = MemoryStorage()
    >>> w = storage.writer("/logs/a")
    >>> w.open(); w.append(b"x\\n"); w.close()
    >>> storage.records("/logs/a")
    [b'x\\n']
    """

    def __init__(self) -> None:
        self._records: defaultdict[str, list[bytes]] = defaultdict(list)
        self.opened: list[str] = []
        self.closed: list[str] = []

    def writer(self, destination: str) -> MemoryWriter:
        """Writer factory bound to this storage."""
        return MemoryWriter(destination, self)

    def records(self, destination: str) -> list[bytes]:
        return list(self._records.get(destination, []))

    def destinations(self) -> list[str]:
        """Destinations that received at least one record, sorted."""
        return sorted(d for d, recs in self._records.items() if recs)

    def _append(self, destination: str, data: bytes) -> None:
        self._records[destination].append(data)


class MemoryWriter:
    """Writer that appends into a ``MemoryStorage``."""

    def __init__(self, destination: str, storage: MemoryStorage) -> None:
        self._destination = destination
        self._storage = storage
        self._open = False

    @property
    def path(self) -> str:
        return self._destination

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self) -> None:
        if self._open:
            raise WriterStateError(f"Writer for {self._destination} is already open")
        self._open = True
        self._storage.opened.append(self._destination)

    def append(self, data: bytes) -> None:
        if not self._open:
            raise WriterStateError(f"Writer for {self._destination} is not open")
        self._storage._append(self._destination, data)

    def close(self) -> None:
        if not self._open:
            return
        self._open = False
        self._storage.closed.append(self._destination)
