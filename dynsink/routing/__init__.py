"""Dynsink event routing — writes each event to the destination its tags select.

``EscapedSink`` owns one writer per resolved destination, opening them
lazily for templates with escape sequences and eagerly for fixed ones.
``build_escaped_sink`` validates positional builder arguments and wires a
sink together.
"""

from dynsink.routing.builder import ConfigurationError, build_escaped_sink, parse_sink_args
from dynsink.routing.escaped_sink import (
    AppendBeforeOpenError,
    EscapedSink,
    SinkCloseError,
    SinkClosedError,
    WriterEntry,
)
from dynsink.routing.sinks import CollectingSink, EventSink

__all__ = [
    "AppendBeforeOpenError",
    "CollectingSink",
    "ConfigurationError",
    "EscapedSink",
    "EventSink",
    "SinkCloseError",
    "SinkClosedError",
    "WriterEntry",
    "build_escaped_sink",
    "parse_sink_args",
]
