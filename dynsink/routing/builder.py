"""Builds escaped sinks from positional builder arguments.

Argument contract: ``[destination, filename?, format?]``.  The format may be
an ``OutputFormatSpec``, a mapping with ``name``/``args``, or a legacy bare
format name; it is normalized here, once, and validated by resolving it
before the sink is constructed.
"""

from __future__ import annotations

import logging
from typing import Any

from dynsink.config import SinkSettings
from dynsink.formats.registry import FormatRegistry, FormatResolutionError, default_registry
from dynsink.models.formats import OutputFormatSpec
from dynsink.models.sink import SinkConfig
from dynsink.routing.escaped_sink import EscapedSink

logger = logging.getLogger(__name__)

USAGE = 'usage: escaped("[file://]/path/%{tag}"[, "filename"[, outputformat]])'


class ConfigurationError(ValueError):
    """Raised when sink arguments are invalid.  No sink is built."""


def parse_sink_args(
    *args: Any,
    registry: FormatRegistry | None = None,
) -> SinkConfig:
    """Validate builder arguments and return the sink configuration.

    Raises
    ------
    ConfigurationError
        Wrong argument count, or a format that cannot be resolved.
    """
    registry = registry or default_registry

    if not 1 <= len(args) <= 3:
        raise ConfigurationError(f"Expected 1 to 3 arguments, got {len(args)}; {USAGE}")

    destination = str(args[0])
    if not destination:
        raise ConfigurationError(f"Destination template must not be empty; {USAGE}")
    filename = str(args[1]) if len(args) >= 2 and args[1] is not None else ""
    format_arg = args[2] if len(args) >= 3 else None

    spec: OutputFormatSpec | None = None
    # Omitted formats are resolved per writer, falling back to raw.
    if format_arg is not None:
        try:
            spec = OutputFormatSpec.coerce(format_arg)
            registry.resolve(spec)
        except (FormatResolutionError, TypeError, ValueError) as exc:
            logger.warning("Illegal format type %r: %s", format_arg, exc)
            raise ConfigurationError(f"Illegal format type {format_arg!r}: {exc}") from exc

    return SinkConfig(
        destination_template=destination,
        filename_template=filename,
        format_spec=spec,
    )


def build_escaped_sink(
    *args: Any,
    settings: SinkSettings | None = None,
    registry: FormatRegistry | None = None,
    **wiring: Any,
) -> EscapedSink:
    """Construct an ``EscapedSink`` from positional builder arguments.

    Extra keyword arguments (``writer_factory``, ``resolver``,
    ``downstream``, ``max_open_writers``) are passed through to the sink.

    Examples
    --------
    >>> sink = build_escaped_sink("/logs/%{host}", "app.log", "json")
    >>> sink.template
    '/logs/%{host}/app.log'
    """
    sink_config = parse_sink_args(*args, registry=registry)
    return EscapedSink(sink_config, settings=settings, registry=registry, **wiring)
