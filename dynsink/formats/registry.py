"""Output format registry — builds serializers from format specs.

Formats are registered under a name with a factory.  Resolving a spec calls
the factory with the spec's arguments and returns a brand-new instance, so
every destination gets its own stream state.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from dynsink.formats.base import OutputFormat
from dynsink.formats.jsonl import JsonOutputFormat
from dynsink.formats.text import Log4jOutputFormat, RawOutputFormat, SyslogOutputFormat
from dynsink.models.formats import OutputFormatSpec

logger = logging.getLogger(__name__)

FormatFactory = Callable[..., OutputFormat]


class FormatResolutionError(ValueError):
    """Raised when a format spec names an unknown format or bad arguments."""


class FormatRegistry:
    """Name-to-factory catalog of output formats.

    Examples
    --------
    >>> registry = FormatRegistry()
    >>> registry.register("raw", RawOutputFormat)
    >>> registry.resolve(OutputFormatSpec(name="raw")).format_name
    'raw'
    """

    def __init__(self) -> None:
        self._factories: dict[str, FormatFactory] = {}

    # -- Registration -------------------------------------------------------

    def register(self, name: str, factory: FormatFactory, *, replace: bool = False) -> None:
        """Register *factory* under *name*.

        Raises
        ------
        ValueError
            If *name* is taken and ``replace`` is false.
        """
        if name in self._factories and not replace:
            raise ValueError(f"Output format '{name}' is already registered.")
        self._factories[name] = factory
        logger.debug("Registered output format '%s'", name)

    def unregister(self, name: str) -> bool:
        """Remove *name*; return ``True`` if it was registered."""
        return self._factories.pop(name, None) is not None

    # -- Lookup -------------------------------------------------------------

    def names(self) -> list[str]:
        """Registered format names, sorted."""
        return sorted(self._factories)

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def resolve(self, spec: OutputFormatSpec | str | dict[str, Any]) -> OutputFormat:
        """Build a fresh output format for *spec*.

        Raises
        ------
        FormatResolutionError
            If the name is unknown or the factory rejects the arguments.
        """
        try:
            spec = OutputFormatSpec.coerce(spec)
        except (TypeError, ValueError) as exc:
            raise FormatResolutionError(f"Invalid output format spec {spec!r}: {exc}") from exc

        factory = self._factories.get(spec.name)
        if factory is None:
            raise FormatResolutionError(
                f"Unknown output format '{spec.name}' "
                f"(available: {', '.join(self.names()) or 'none'})"
            )
        try:
            return factory(*spec.args)
        except (TypeError, ValueError) as exc:
            raise FormatResolutionError(
                f"Output format '{spec}' rejected its arguments: {exc}"
            ) from exc


def _builtin_registry() -> FormatRegistry:
    registry = FormatRegistry()
    registry.register("raw", RawOutputFormat)
    registry.register("json", JsonOutputFormat)
    registry.register("syslog", SyslogOutputFormat)
    registry.register("log4j", Log4jOutputFormat)
    return registry


# Process-wide catalog: import as `from dynsink.formats.registry import default_registry`
default_registry = _builtin_registry()
