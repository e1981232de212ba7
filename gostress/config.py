"""Runtime configuration — env-driven via pydantic-settings.

Reads from a .env file and GOSTRESS_* environment variables.  Command-line
options override these values per invocation.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class StressConfig(BaseSettings):
    """gostress configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export GOSTRESS_GO_BINARY=/usr/local/go/bin/go
        export GOSTRESS_DEFAULT_COUNT=100
        export GOSTRESS_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="GOSTRESS_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "WARNING"

    # go test invocation
    go_binary: str = "go"
    default_count: int = 1
    failfast: bool = True

    # Output
    show_summary: bool = False


# Module-level singleton — import as `from gostress.config import config`
config = StressConfig()
