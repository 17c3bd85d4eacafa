from __future__ import annotations
"""Exception types raised by :mod:`appconfig`."""

from pathlib import Path


class AppConfigError(Exception):
    """Base class for configuration persistence failures."""


class PathResolutionError(AppConfigError):
    """Raised when no per-user configuration directory can be determined."""


class ConfigIOError(AppConfigError):
    """Raised when creating, reading or writing the configuration file fails."""

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.path = path


class DeserializationError(AppConfigError):
    """Raised when file content cannot be turned into the settings type."""


class SerializationError(AppConfigError):
    """Raised when the settings value cannot be encoded."""
