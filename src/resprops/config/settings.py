"""Configuration settings using Pydantic Settings.

Provides typed configuration with environment variable support for the
deprecation side channel.

Usage:
    from resprops.config import EngineSettings, configure

    # Load from environment variables (RESPROPS_*)
    configure()

    # Or override with explicit values
    configure(EngineSettings(deprecation_mode="error"))
"""

from __future__ import annotations

from typing import Literal

try:
    from pydantic_settings import BaseSettings, SettingsConfigDict
except ImportError as e:
    raise ImportError(
        "pydantic-settings is required for config module. "
        "Install with: pip install pydantic-settings"
    ) from e

from resprops.deprecation import (
    DeprecationSink,
    LoggingSink,
    NullSink,
    RaisingSink,
    WarningsSink,
    set_deprecation_sink,
)


class EngineSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for the property engine.

    Attributes:
        deprecation_mode: How deprecation notices are reported:
            warn (warnings.warn), log (logging), error (raise
            DeprecatedFeatureError) or ignore.
        deprecation_logger: Logger name used when deprecation_mode is "log".

    Environment Variables:
        RESPROPS_DEPRECATION_MODE
        RESPROPS_DEPRECATION_LOGGER
    """

    model_config = SettingsConfigDict(
        env_prefix="RESPROPS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    deprecation_mode: Literal["warn", "log", "error", "ignore"] = "warn"
    deprecation_logger: str = "resprops.deprecation"

    def build_sink(self) -> DeprecationSink:
        """Create the deprecation sink selected by ``deprecation_mode``."""
        if self.deprecation_mode == "log":
            return LoggingSink(self.deprecation_logger)
        if self.deprecation_mode == "error":
            return RaisingSink()
        if self.deprecation_mode == "ignore":
            return NullSink()
        return WarningsSink()


def configure(settings: EngineSettings | None = None) -> DeprecationSink:
    """Install the process-wide deprecation sink described by settings.

    Args:
        settings: Settings to apply; loaded from the environment if None.

    Returns:
        The newly installed sink.
    """
    settings = settings or EngineSettings()
    sink = settings.build_sink()
    set_deprecation_sink(sink)
    return sink
