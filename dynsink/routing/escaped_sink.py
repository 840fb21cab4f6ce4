"""EscapedSink — routes each event to a writer chosen by its tags.

The destination template (plus optional filename template) is classified
once, at construction:

* **static** — no escape sequences.  A single writer is opened eagerly by
  ``open()`` and receives every event.
* **dynamic** — at least one escape sequence.  Each event's tags are
  substituted into the template; the first event for a new destination opens
  a writer, which is cached and reused for every later event resolving to the
  same destination.

Every writer gets its own output format, built from the configured spec.  A
spec that fails to resolve never stops a writer from opening: the process
default format is tried next, then the raw format.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from dynsink.config import SinkSettings, config as default_settings
from dynsink.core.escaping import PathResolver, contains_tag, escape_string
from dynsink.core.writer_cache import WriterCache
from dynsink.formats.base import OutputFormat
from dynsink.formats.registry import FormatRegistry, FormatResolutionError, default_registry
from dynsink.formats.text import RawOutputFormat
from dynsink.models.events import Event
from dynsink.models.formats import OutputFormatSpec
from dynsink.models.sink import RouteMode, SinkConfig, SinkReport
from dynsink.routing.sinks import EventSink
from dynsink.writers import Writer, WriterFactory
from dynsink.writers.local_file import LocalFileWriter

logger = logging.getLogger(__name__)


class AppendBeforeOpenError(RuntimeError):
    """Raised when a static sink receives an event while it has no writer."""


class SinkClosedError(RuntimeError):
    """Raised when a dynamic sink receives an event after ``close()``."""


class SinkCloseError(RuntimeError):
    """Raised when one or more writers fail to close.

    Every writer is attempted before this is raised; ``failures`` lists each
    ``(destination, exception)`` pair.
    """

    def __init__(self, failures: Sequence[tuple[str, BaseException]]) -> None:
        self.failures = list(failures)
        detail = "; ".join(f"{dest}: {exc}" for dest, exc in self.failures)
        super().__init__(f"{len(self.failures)} writer(s) failed to close: {detail}")


@dataclass(slots=True)
class WriterEntry:
    """An open writer and the format bound to it."""

    path: str
    writer: Writer
    output_format: OutputFormat


@dataclass(frozen=True, slots=True)
class StaticRoute:
    path: str
    mode = RouteMode.STATIC


@dataclass(frozen=True, slots=True)
class DynamicRoute:
    template: str
    mode = RouteMode.DYNAMIC


Route = StaticRoute | DynamicRoute


class EscapedSink:
    """Writes events to destinations derived from their tags.

    Not safe for concurrent use: callers must serialize ``open``, ``append``
    and ``close`` on one instance.

    Parameters
    ----------
    sink_config:
        Destination and filename templates plus the output format spec.
    settings:
        Process defaults: fallback format and open-writer ceiling.
    registry:
        Catalog used to build output formats.
    writer_factory:
        Builds an unopened writer for a resolved destination.
    resolver:
        Substitutes event values into the template.
    downstream:
        Optional sink that receives every event after it is written.
    max_open_writers:
        Overrides ``settings.max_open_writers``; ``0`` means unbounded.

    Examples
    --------
    >>> from dynsink.writers.memory import MemoryStorage
    >>> storage = MemoryStorage()
    >>> sink = EscapedSink(
    ...     SinkConfig(destination_template="/logs/%{host}", filename_template="app.log"),
    ...     writer_factory=storage.writer,
    ... )
    >>> sink.open()
    >>> sink.append(Event(body=b"hi", tags={"host": "h1"}))
    >>> sink.close()
    >>> storage.destinations()
    ['/logs/h1/app.log']
    """

    def __init__(
        self,
        sink_config: SinkConfig,
        *,
        settings: SinkSettings | None = None,
        registry: FormatRegistry | None = None,
        writer_factory: WriterFactory = LocalFileWriter,
        resolver: PathResolver = escape_string,
        downstream: EventSink | None = None,
        max_open_writers: int | None = None,
    ) -> None:
        self._config = sink_config
        self._settings = settings or default_settings
        self._registry = registry or default_registry
        self._writer_factory = writer_factory
        self._resolver = resolver
        self._downstream = downstream

        template = sink_config.absolute_template
        if contains_tag(sink_config.destination_template) or contains_tag(
            sink_config.filename_template
        ):
            self._route: Route = DynamicRoute(template)
        else:
            self._route = StaticRoute(template)

        if max_open_writers is None:
            max_open_writers = self._settings.max_open_writers
        self._writers: WriterCache[WriterEntry] = WriterCache(
            max_open=max_open_writers, on_evict=self._close_evicted
        )
        self._current: WriterEntry | None = None
        self._closed = False
        self._eviction_failures: list[tuple[str, BaseException]] = []

        self._events_appended = 0
        self._writers_opened = 0

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def mode(self) -> RouteMode:
        return self._route.mode

    @property
    def template(self) -> str:
        """The absolute destination template, filename included."""
        return self._config.absolute_template

    @property
    def format_spec(self) -> OutputFormatSpec:
        """The configured spec, or the process default when none was given."""
        if self._config.format_spec is not None:
            return self._config.format_spec
        return OutputFormatSpec.coerce(self._settings.default_output_format)

    def open_destinations(self) -> list[str]:
        """Destinations with an open writer, sorted."""
        if isinstance(self._route, StaticRoute):
            return [self._current.path] if self._current is not None else []
        return sorted(self._writers.keys())

    def report(self) -> SinkReport:
        """Snapshot of this sink's counters."""
        return SinkReport(
            mode=self.mode,
            template=self.template,
            events_appended=self._events_appended,
            writers_opened=self._writers_opened,
            writers_evicted=self._writers.evictions,
            open_destinations=self.open_destinations(),
            eviction_failures=[dest for dest, _ in self._eviction_failures],
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(self) -> None:
        """Open the single writer of a static sink; no-op when dynamic."""
        self._closed = False
        if isinstance(self._route, StaticRoute):
            if self._current is not None:
                logger.warning("Writer for '%s' is already open", self._route.path)
                return
            self._current = self.open_writer(self._route.path)

    def append(self, event: Event) -> None:
        """Write *event* to its destination, then forward it downstream.

        Raises
        ------
        AppendBeforeOpenError
            Static sink without an open writer.
        SinkClosedError
            Dynamic sink after ``close()``.
        OSError
            Opening or appending to the underlying writer failed.
        """
        if isinstance(self._route, StaticRoute):
            entry = self._current
            if entry is None:
                raise AppendBeforeOpenError(
                    f"Append to '{self._route.path}' before open() (or after close())"
                )
        else:
            if self._closed:
                raise SinkClosedError(
                    f"Append to closed sink for template '{self._route.template}'"
                )
            destination = self._resolver(self._route.template, event)
            entry = self._writers.get_or_create(destination, self.open_writer)

        entry.writer.append(entry.output_format.format(event))
        self._events_appended += 1
        if self._downstream is not None:
            self._downstream.append(event)

    def close(self) -> None:
        """Close every writer this sink holds.

        Raises
        ------
        SinkCloseError
            Dynamic sink where at least one writer failed to close, either
            here or earlier when it was evicted.  The remaining writers are
            still closed first.
        OSError
            Static sink whose writer failed to close.
        """
        if isinstance(self._route, StaticRoute):
            logger.info("Closing %s", self._route.path)
            entry = self._current
            if entry is None:
                logger.warning(
                    "EscapedSink writer for '%s' was already closed!", self._route.path
                )
                return
            self._current = None
            entry.writer.close()
            return

        failures = self._eviction_failures
        self._eviction_failures = []
        for destination, entry in self._writers.items():
            logger.info("Closing %s", destination)
            try:
                entry.writer.close()
            except Exception as exc:  # noqa: BLE001
                logger.error("Failed to close %s: %s", destination, exc)
                failures.append((destination, exc))
        self._writers.clear()
        self._closed = True

        if failures:
            raise SinkCloseError(failures)

    # ------------------------------------------------------------------
    # Writer construction
    # ------------------------------------------------------------------

    def open_writer(self, destination: str) -> WriterEntry:
        """Build and open a writer for *destination* with its own format.

        Format problems are absorbed by the fallback chain; errors raised by
        the writer's ``open()`` propagate.
        """
        logger.info("Opening %s", destination)
        output_format = self._resolve_output_format()
        writer = self._writer_factory(destination)
        writer.open()
        self._writers_opened += 1
        return WriterEntry(path=destination, writer=writer, output_format=output_format)

    def _format_attempts(self) -> list[OutputFormatSpec | str]:
        attempts: list[OutputFormatSpec | str] = []
        if self._config.format_spec is not None:
            attempts.append(self._config.format_spec)
        attempts.append(self._settings.default_output_format)
        return attempts

    def _resolve_output_format(self) -> OutputFormat:
        for spec in self._format_attempts():
            try:
                return self._registry.resolve(spec)
            except FormatResolutionError as exc:
                logger.warning("Had problem creating format %s; trying next: %s", spec, exc)
        logger.warning("No configured format could be built; reverting to raw")
        return RawOutputFormat()

    def _close_evicted(self, destination: str, entry: WriterEntry) -> None:
        # Runs inside append() for another destination; failures surface at close().
        logger.info("Closing %s (evicted)", destination)
        try:
            entry.writer.close()
        except Exception as exc:  # noqa: BLE001
            logger.error("Failed to close %s: %s", destination, exc)
            self._eviction_failures.append((destination, exc))
