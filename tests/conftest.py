"""Shared test fixtures for dynsink."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

import pytest

from dynsink.config import SinkSettings
from dynsink.models.events import Event
from dynsink.models.formats import OutputFormatSpec
from dynsink.models.sink import SinkConfig
from dynsink.routing.escaped_sink import EscapedSink
from dynsink.writers.memory import MemoryStorage


class RecordingWriter:
    """Writer double that records calls and can be told to fail."""

    def __init__(
        self,
        destination: str,
        *,
        fail_open: bool = False,
        fail_append: bool = False,
        fail_close: bool = False,
    ) -> None:
        self._destination = destination
        self.fail_open = fail_open
        self.fail_append = fail_append
        self.fail_close = fail_close
        self.records: list[bytes] = []
        self.open_calls = 0
        self.close_calls = 0

    @property
    def path(self) -> str:
        return self._destination

    def open(self) -> None:
        self.open_calls += 1
        if self.fail_open:
            raise OSError(f"cannot open {self._destination}")

    def append(self, data: bytes) -> None:
        if self.fail_append:
            raise OSError(f"cannot append to {self._destination}")
        self.records.append(data)

    def close(self) -> None:
        self.close_calls += 1
        if self.fail_close:
            raise OSError(f"cannot close {self._destination}")


class RecordingWriterFactory:
    """Builds ``RecordingWriter`` instances and remembers each one."""

    def __init__(self, **failures: set[str]) -> None:
        # e.g. fail_close={"/logs/h1/app.log"}
        self._failures = failures
        self.created: list[RecordingWriter] = []

    def __call__(self, destination: str) -> RecordingWriter:
        writer = RecordingWriter(
            destination,
            fail_open=destination in self._failures.get("fail_open", set()),
            fail_append=destination in self._failures.get("fail_append", set()),
            fail_close=destination in self._failures.get("fail_close", set()),
        )
        self.created.append(writer)
        return writer

    def for_path(self, destination: str) -> list[RecordingWriter]:
        return [w for w in self.created if w.path == destination]


@pytest.fixture
def settings() -> SinkSettings:
    """Settings pinned to known values, independent of the environment."""
    return SinkSettings(
        _env_file=None,
        environment="test",
        default_output_format="json",
        max_open_writers=0,
    )


@pytest.fixture
def storage() -> MemoryStorage:
    """A fresh in-memory storage backend."""
    return MemoryStorage()


@pytest.fixture
def writer_factory() -> RecordingWriterFactory:
    """A recording writer factory with no injected failures."""
    return RecordingWriterFactory()


@pytest.fixture
def make_writer_factory() -> type[RecordingWriterFactory]:
    """The recording factory class, for tests that inject failures."""
    return RecordingWriterFactory


@pytest.fixture
def make_event() -> Callable[..., Event]:
    """Factory fixture: build an Event with deterministic defaults."""

    def _factory(body: bytes | str = b"payload", **overrides: Any) -> Event:
        if isinstance(body, str):
            body = body.encode("utf-8")
        defaults: dict[str, Any] = {
            "body": body,
            "tags": {},
            "host": "test-host",
            "timestamp": datetime(2024, 3, 5, 14, 7, 9, 123000, tzinfo=timezone.utc),
        }
        defaults.update(overrides)
        return Event(**defaults)

    return _factory


@pytest.fixture
def make_sink(
    settings: SinkSettings, writer_factory: RecordingWriterFactory
) -> Callable[..., EscapedSink]:
    """Factory fixture: build an EscapedSink wired to recording writers."""

    def _factory(
        destination: str,
        filename: str = "",
        format_spec: OutputFormatSpec | str | None = None,
        **wiring: Any,
    ) -> EscapedSink:
        spec = OutputFormatSpec.coerce(format_spec) if format_spec is not None else None
        wiring.setdefault("writer_factory", writer_factory)
        wiring.setdefault("settings", settings)
        return EscapedSink(
            SinkConfig(
                destination_template=destination,
                filename_template=filename,
                format_spec=spec,
            ),
            **wiring,
        )

    return _factory
