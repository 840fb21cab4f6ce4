"""Dynsink: tag-routed, multi-destination event sinks.

Events carry tags; a destination template such as ``/logs/%{host}/app.log``
turns those tags into a concrete path.  ``EscapedSink`` opens one writer per
distinct path on first use, serializes every event through a pluggable output
format, and closes every writer it owns on ``close()``.
"""

__version__ = "0.1.0"
__description__ = "Tag-routed, multi-destination event sinks"

from dynsink.models.events import Event, Priority
from dynsink.models.formats import OutputFormatSpec
from dynsink.models.sink import SinkConfig
from dynsink.routing.builder import ConfigurationError, build_escaped_sink
from dynsink.routing.escaped_sink import EscapedSink

__all__ = [
    "ConfigurationError",
    "EscapedSink",
    "Event",
    "OutputFormatSpec",
    "Priority",
    "SinkConfig",
    "build_escaped_sink",
    "__version__",
]
