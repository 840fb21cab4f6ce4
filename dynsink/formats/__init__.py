"""Output formats: pluggable serializers applied before bytes hit a writer.

Every writer owns its own format instance.  Formats are looked up by name in
a ``FormatRegistry``; ``default_registry`` carries the built-in ``raw``,
``json``, ``syslog`` and ``log4j`` formats.
"""

from dynsink.formats.base import OutputFormat, StreamFormat
from dynsink.formats.jsonl import JsonOutputFormat
from dynsink.formats.registry import FormatRegistry, FormatResolutionError, default_registry
from dynsink.formats.text import Log4jOutputFormat, RawOutputFormat, SyslogOutputFormat

__all__ = [
    "FormatRegistry",
    "FormatResolutionError",
    "JsonOutputFormat",
    "Log4jOutputFormat",
    "OutputFormat",
    "RawOutputFormat",
    "StreamFormat",
    "SyslogOutputFormat",
    "default_registry",
]
