"""Tag escaping for destination templates.

Two placeholder forms are recognized:

* ``%{name}`` — the event's tag ``name``.  When the event carries no such
  tag, the built-in names ``host``/``hostname``, ``priority``, ``body``,
  ``timestamp`` (epoch millis) and ``nanos`` are consulted.  Anything else
  resolves to the empty string.
* ``%x`` — a single-character time shorthand formatted from the event
  timestamp (``%Y`` year, ``%m`` month, ``%d`` day, ``%H`` hour, ...).
  ``%%`` is a literal percent sign.  Unknown shorthand characters are left
  untouched.
"""

from __future__ import annotations

import calendar
import re
from collections.abc import Callable
from datetime import datetime
from typing import Protocol

from dynsink.models.events import Event

TAG_PATTERN = re.compile(r"%(?:\{(?P<tag>[\w.-]+)\}|(?P<short>[\w%]))")


class PathResolver(Protocol):
    """Turns a template plus an event into a concrete destination."""

    def __call__(self, template: str, event: Event) -> str:
        ...


def _unpadded(fmt: str) -> Callable[[datetime], str]:
    return lambda ts: str(int(ts.strftime(fmt)))


_SHORTHAND: dict[str, Callable[[datetime], str]] = {
    "a": lambda ts: ts.strftime("%a"),
    "A": lambda ts: ts.strftime("%A"),
    "b": lambda ts: ts.strftime("%b"),
    "B": lambda ts: ts.strftime("%B"),
    "c": lambda ts: ts.strftime("%a %b %d %H:%M:%S %Y"),
    "d": lambda ts: ts.strftime("%d"),
    "D": lambda ts: ts.strftime("%m/%d/%y"),
    "H": lambda ts: ts.strftime("%H"),
    "I": lambda ts: ts.strftime("%I"),
    "j": lambda ts: ts.strftime("%j"),
    "k": _unpadded("%H"),
    "l": _unpadded("%I"),
    "m": lambda ts: ts.strftime("%m"),
    "M": lambda ts: ts.strftime("%M"),
    "p": lambda ts: ts.strftime("%p"),
    "s": lambda ts: str(int(ts.timestamp())),
    "S": lambda ts: ts.strftime("%S"),
    "t": lambda ts: str(int(ts.timestamp() * 1000)),
    "y": lambda ts: ts.strftime("%y"),
    "Y": lambda ts: ts.strftime("%Y"),
    "z": lambda ts: ts.strftime("%z"),
}


def contains_tag(template: str | None) -> bool:
    """Return ``True`` if *template* has at least one escape sequence.

    Examples
    --------
    >>> contains_tag("/logs/%{host}/app.log")
    True
    >>> contains_tag("/logs/static/app.log")
    False
    """
    if not template:
        return False
    return TAG_PATTERN.search(template) is not None


def _builtin(name: str, event: Event) -> str:
    if name in ("host", "hostname"):
        return event.host
    if name == "priority":
        return event.priority.value
    if name == "body":
        return event.body_text
    if name == "timestamp":
        return str(event.timestamp_millis)
    if name == "nanos":
        ts = event.timestamp
        return str(calendar.timegm(ts.utctimetuple()) * 1_000_000_000 + ts.microsecond * 1000)
    return ""


def escape_string(template: str, event: Event) -> str:
    """Substitute every escape sequence in *template* using *event*.

    Tags on the event take precedence over the built-in names, so an event
    tagged ``host=h1`` resolves ``%{host}`` to ``h1`` whatever machine it
    came from.

    Examples
    --------
    >>> e = Event(body=b"x", tags={"host": "h1"})
    >>> escape_string("/logs/%{host}/app.log", e)
    '/logs/h1/app.log'
    """

    def _replace(match: re.Match[str]) -> str:
        tag = match.group("tag")
        if tag is not None:
            if tag in event.tags:
                return event.tags[tag]
            return _builtin(tag, event)

        short = match.group("short")
        if short == "%":
            return "%"
        formatter = _SHORTHAND.get(short)
        if formatter is None:
            return match.group(0)
        return formatter(event.timestamp)

    return TAG_PATTERN.sub(_replace, template)
