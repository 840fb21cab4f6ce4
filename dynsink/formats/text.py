"""Line-oriented text formats: raw bodies, syslog and log4j layouts."""

from __future__ import annotations

from dynsink.formats.base import StreamFormat
from dynsink.models.events import Event, Priority

# RFC 3164 severities
_SYSLOG_SEVERITY: dict[Priority, int] = {
    Priority.FATAL: 2,
    Priority.ERROR: 3,
    Priority.WARN: 4,
    Priority.INFO: 6,
    Priority.DEBUG: 7,
    Priority.TRACE: 7,
}


class RawOutputFormat(StreamFormat):
    """Writes the event body unchanged, followed by a terminator.

    This format cannot fail to construct with its defaults and is the last
    resort when no configured format can be resolved.
    """

    format_name = "raw"

    def __init__(self, terminator: str = "\n") -> None:
        if not isinstance(terminator, str):
            raise TypeError(f"terminator must be a string, got {type(terminator).__name__}")
        super().__init__()
        self._terminator = terminator.encode("utf-8")

    def encode(self, event: Event) -> bytes:
        return event.body + self._terminator


class SyslogOutputFormat(StreamFormat):
    """``<PRI>Mmm dd HH:MM:SS host body`` lines.

    Parameters
    ----------
    facility:
        Syslog facility code, 0 through 23.  Defaults to 1 (user-level).
    """

    format_name = "syslog"

    def __init__(self, facility: int = 1) -> None:
        facility = int(facility)
        if not 0 <= facility <= 23:
            raise ValueError(f"syslog facility must be in 0..23, got {facility}")
        super().__init__()
        self._facility = facility

    def encode(self, event: Event) -> bytes:
        pri = self._facility * 8 + _SYSLOG_SEVERITY[event.priority]
        ts = event.timestamp
        # RFC 3164 pads single-digit days with a space
        stamp = f"{ts.strftime('%b')} {ts.day:>2} {ts.strftime('%H:%M:%S')}"
        return f"<{pri}>{stamp} {event.host} {event.body_text}\n".encode("utf-8")


class Log4jOutputFormat(StreamFormat):
    """``yyyy-MM-dd HH:mm:ss,SSS PRIORITY host body`` lines."""

    format_name = "log4j"

    def encode(self, event: Event) -> bytes:
        ts = event.timestamp
        stamp = ts.strftime("%Y-%m-%d %H:%M:%S") + f",{ts.microsecond // 1000:03d}"
        return f"{stamp} {event.priority.value} {event.host} {event.body_text}\n".encode("utf-8")
