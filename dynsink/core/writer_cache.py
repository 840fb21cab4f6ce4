"""Get-or-create cache of open writers keyed by resolved destination.

The cache is not synchronized.  Callers must serialize every access; the
append path of a sink is single-threaded per instance.

Without a ceiling the cache grows for as long as the owning sink lives, one
entry per distinct destination.  With ``max_open`` set, inserting past the
ceiling removes the least-recently-used entry and hands it to ``on_evict``,
which is expected to close it.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from collections.abc import Callable, Iterator
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

V = TypeVar("V")


class WriterCache(Generic[V]):
    """Maps resolved destinations to exclusively-owned open entries.

    Parameters
    ----------
    max_open:
        Maximum number of entries held at once.  ``None`` or ``0`` means
        unbounded.
    on_evict:
        Called with ``(key, value)`` for every entry pushed out by the
        ceiling.  Not called by ``pop`` or ``clear``.

    Examples
    --------
    >>> cache = WriterCache[str](max_open=1)
    >>> cache.get_or_create("/a", lambda key: key.upper())
    '/A'
    >>> cache.get_or_create("/a", lambda key: "never built")
    '/A'
    """

    def __init__(
        self,
        max_open: int | None = None,
        on_evict: Callable[[str, V], None] | None = None,
    ) -> None:
        if max_open is not None and max_open < 0:
            raise ValueError(f"max_open must be >= 0, got {max_open}")
        self._max_open = max_open or None
        self._on_evict = on_evict
        self._entries: OrderedDict[str, V] = OrderedDict()
        self._evictions = 0

    @property
    def max_open(self) -> int | None:
        return self._max_open

    @property
    def evictions(self) -> int:
        """Number of entries removed by the ceiling so far."""
        return self._evictions

    def get(self, key: str) -> V | None:
        """Return the entry for *key*, marking it most recently used."""
        value = self._entries.get(key)
        if value is not None:
            self._entries.move_to_end(key)
        return value

    def get_or_create(self, key: str, factory: Callable[[str], V]) -> V:
        """Return the entry for *key*, building and inserting it if absent.

        The factory runs before anything is evicted, so a failing factory
        leaves the cache untouched and propagates its exception.
        """
        existing = self.get(key)
        if existing is not None:
            return existing

        value = factory(key)
        self._entries[key] = value
        self._evict_overflow()
        return value

    def _evict_overflow(self) -> None:
        if self._max_open is None:
            return
        while len(self._entries) > self._max_open:
            key, value = self._entries.popitem(last=False)
            self._evictions += 1
            logger.info("Evicting least recently used writer %s", key)
            if self._on_evict is not None:
                self._on_evict(key, value)

    def pop(self, key: str) -> V | None:
        """Remove and return the entry for *key* without calling ``on_evict``."""
        return self._entries.pop(key, None)

    def keys(self) -> list[str]:
        """Cached destinations, least recently used first."""
        return list(self._entries)

    def items(self) -> list[tuple[str, V]]:
        """A snapshot of ``(destination, entry)`` pairs."""
        return list(self._entries.items())

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))
