"""Configuration module using Pydantic Settings.

Usage:
    from resprops.config import EngineSettings, configure

    configure(EngineSettings(deprecation_mode="log"))
"""

from resprops.config.settings import EngineSettings, configure

__all__ = [
    "EngineSettings",
    "configure",
]
