"""Process-wide sink settings, driven by the environment.

Reads from a .env file and DYNSINK_* environment variables.  The values here
are the process defaults consulted when a sink is built without an explicit
output format or open-writer ceiling.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class SinkSettings(BaseSettings):
    """Sink defaults with environment variable overrides.

    Examples
    --------
    Override via environment::

        export DYNSINK_DEFAULT_OUTPUT_FORMAT=raw
        export DYNSINK_MAX_OPEN_WRITERS=256
        export DYNSINK_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="DYNSINK_",
        env_file_encoding="utf-8",
    )

    # Runtime environment
    environment: str = "development"
    log_level: str = "INFO"

    # Output format used when a sink is configured without one, and the
    # second attempt in the per-destination fallback chain.
    default_output_format: str = "json"

    # Ceiling on simultaneously open writers per dynamic sink; 0 is unbounded.
    max_open_writers: int = 0

    @property
    def is_production(self) -> bool:
        """Whether running in production mode."""
        return self.environment == "production"


# Module-level singleton: import as `from dynsink.config import config`
config = SinkSettings()
