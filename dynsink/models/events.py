"""Event records routed by the sinks.

An event is an immutable record: a payload body plus a mapping of tag names
to values.  Tags drive destination selection; host, priority and timestamp
feed the built-in path escapes and the text output formats.
"""

from __future__ import annotations

import platform
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Priority(str, Enum):
    """Event severity, ordered from most to least severe."""

    FATAL = "FATAL"
    ERROR = "ERROR"
    WARN = "WARN"
    INFO = "INFO"
    DEBUG = "DEBUG"
    TRACE = "TRACE"


class Event(BaseModel):
    """A single record flowing through a sink.

    Examples
    --------
    >>> e = Event(body=b"hello", tags={"host": "web-1"})
    >>> e.tags["host"]
    'web-1'
    >>> e.priority
    <Priority.INFO: 'INFO'>
    """

    model_config = ConfigDict(frozen=True)

    body: bytes = b""
    tags: dict[str, str] = {}
    host: str = Field(default_factory=platform.node)
    priority: Priority = Priority.INFO
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    @property
    def body_text(self) -> str:
        """The body decoded as UTF-8, with undecodable bytes replaced."""
        return self.body.decode("utf-8", errors="replace")

    @property
    def timestamp_millis(self) -> int:
        """Milliseconds since the Unix epoch."""
        return int(self.timestamp.timestamp() * 1000)
