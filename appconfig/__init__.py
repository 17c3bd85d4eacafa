"""Persist an application settings object to a per-user configuration file."""

from .codecs import Codec, JsonCodec, TomlCodec
from .errors import (
    AppConfigError,
    ConfigIOError,
    DeserializationError,
    PathResolutionError,
    SerializationError,
)
from .manager import ConfigManager
from .paths import config_file_path, user_config_root

__all__ = [
    "AppConfigError",
    "Codec",
    "ConfigIOError",
    "ConfigManager",
    "DeserializationError",
    "JsonCodec",
    "PathResolutionError",
    "SerializationError",
    "TomlCodec",
    "config_file_path",
    "user_config_root",
]
