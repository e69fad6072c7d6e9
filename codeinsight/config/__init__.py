"""Configuration package."""

from codeinsight.config.settings import Settings, settings

__all__ = [
    "Settings",
    "settings",
]
