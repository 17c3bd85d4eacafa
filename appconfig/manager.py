from __future__ import annotations
"""Binding between a live settings object and its configuration file."""

import copy
import logging
from pathlib import Path
from typing import Callable, Generic, TypeVar

from .codecs import Codec, TomlCodec
from .convert import assign, from_mapping, to_mapping
from .errors import ConfigIOError, DeserializationError
from .paths import config_dir, config_file_path

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class ConfigManager(Generic[T]):
    """Loads and saves a single settings object.

    The file lives at ``<config root>/com.<organization_name>.<app_name>/app_config.toml``
    (the extension follows the codec). The manager never copies the settings
    object: :meth:`load` updates the caller's instance in place, so every
    holder of a reference sees the reloaded values.

    When ``auto_recovery`` is enabled, a missing, unreadable or malformed file
    resets the settings to their defaults instead of raising. When
    ``auto_saving`` is enabled, :meth:`close` (or leaving a ``with`` block)
    saves the settings and discards any error.
    """

    def __init__(
        self,
        data: T,
        app_name: str,
        organization_name: str,
        *,
        auto_recovery: bool = True,
        auto_saving: bool = True,
        codec: Codec | None = None,
        config_root: str | Path | None = None,
        default_factory: Callable[[], T] | None = None,
    ):
        self._data = data
        self._app_name = app_name
        self._organization_name = organization_name
        self._auto_recovery = auto_recovery
        self._auto_saving = auto_saving
        self._codec: Codec = codec or TomlCodec()
        self._config_root = Path(config_root) if config_root is not None else None
        self._default_factory: Callable[[], T] = default_factory or type(data)
        self._closed = False

    def __enter__(self) -> "ConfigManager[T]":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def data(self) -> T:
        return self._data

    @property
    def app_name(self) -> str:
        return self._app_name

    @property
    def organization_name(self) -> str:
        return self._organization_name

    @property
    def auto_recovery(self) -> bool:
        return self._auto_recovery

    @property
    def auto_saving(self) -> bool:
        return self._auto_saving

    @property
    def codec(self) -> Codec:
        return self._codec

    @property
    def closed(self) -> bool:
        return self._closed

    # Fluent configuration -------------------------------------------------
    def set_auto_recovery(self, value: bool) -> "ConfigManager[T]":
        self._auto_recovery = value
        return self

    def with_auto_recovery(self, value: bool) -> "ConfigManager[T]":
        return self._take().set_auto_recovery(value)

    def set_auto_saving(self, value: bool) -> "ConfigManager[T]":
        self._auto_saving = value
        return self

    def with_auto_saving(self, value: bool) -> "ConfigManager[T]":
        return self._take().set_auto_saving(value)

    def set_app_name(self, value: str) -> "ConfigManager[T]":
        self._app_name = value
        return self

    def with_app_name(self, value: str) -> "ConfigManager[T]":
        return self._take().set_app_name(value)

    def set_organization_name(self, value: str) -> "ConfigManager[T]":
        self._organization_name = value
        return self

    def with_organization_name(self, value: str) -> "ConfigManager[T]":
        return self._take().set_organization_name(value)

    def set_codec(self, value: Codec) -> "ConfigManager[T]":
        self._codec = value
        return self

    def with_codec(self, value: Codec) -> "ConfigManager[T]":
        return self._take().set_codec(value)

    def set_config_root(self, value: str | Path | None) -> "ConfigManager[T]":
        self._config_root = Path(value) if value is not None else None
        return self

    def with_config_root(self, value: str | Path | None) -> "ConfigManager[T]":
        return self._take().set_config_root(value)

    def _take(self) -> "ConfigManager[T]":
        """Hand teardown ownership over to a copy of this manager."""
        clone = copy.copy(self)
        self._closed = True
        return clone

    # Paths ----------------------------------------------------------------
    def config_dir(self) -> Path:
        """Return the application directory, creating it when missing."""
        return config_dir(self._organization_name, self._app_name, self._config_root)

    @property
    def config_path(self) -> Path:
        """Path of the settings file. Creates the parent directory as a side effect."""
        return config_file_path(
            self._organization_name,
            self._app_name,
            self._codec.extension,
            self._config_root,
        )

    # Persistence ----------------------------------------------------------
    def load(self) -> None:
        """Replace the settings with the file content.

        Raises:
            PathResolutionError | ConfigIOError: when the config directory
                cannot be resolved or created, or (without auto-recovery) the
                file cannot be read.
            DeserializationError: without auto-recovery, when the content does
                not decode into the settings type.
        """
        path = self.config_path
        try:
            value = self._read(path)
        except (ConfigIOError, DeserializationError) as exc:
            if not self._auto_recovery:
                raise
            if isinstance(exc.__cause__, FileNotFoundError):
                LOGGER.debug("No settings file at %s; using defaults", path)
            else:
                LOGGER.warning("Discarding unreadable settings file %s: %s", path, exc)
            value = self._default_factory()
        assign(self._data, value)
        LOGGER.debug("Loaded settings from %s", path)

    def save(self) -> None:
        """Write the current settings, replacing the file content.

        Raises:
            PathResolutionError | ConfigIOError: when the directory or file
                cannot be written.
            SerializationError: when the settings cannot be encoded.
        """
        path = self.config_path
        payload = to_mapping(self._data)
        text = self._codec.dumps(payload)
        try:
            path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise ConfigIOError(f"Unable to write {path}: {exc}", path) from exc
        LOGGER.debug("Saved settings to %s", path)

    def reset(self) -> None:
        """Restore default settings in place without touching the file."""
        assign(self._data, self._default_factory())

    def close(self) -> None:
        """Release the manager, saving first when auto-saving is enabled.

        Any exception from the final save is logged and discarded.
        """
        if self._closed:
            return
        self._closed = True
        if not self._auto_saving:
            return
        try:
            self.save()
        except Exception:
            LOGGER.debug("Auto-save on close failed", exc_info=True)

    def _read(self, path: Path) -> T:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigIOError(f"Unable to read {path}: {exc}", path) from exc
        except UnicodeDecodeError as exc:
            raise DeserializationError(f"{path} is not valid UTF-8") from exc
        mapping = self._codec.loads(text)
        return from_mapping(type(self._data), mapping)

