from __future__ import annotations
"""Per-platform resolution of the user configuration directory.

| Platform | Base directory                                        |
| -------- | ----------------------------------------------------- |
| Linux    | ``$XDG_CONFIG_HOME`` or ``$HOME/.config``             |
| macOS    | ``$HOME/Library/Application Support``                 |
| Windows  | ``%LOCALAPPDATA%`` or ``%USERPROFILE%\\AppData\\Local`` |
"""

import logging
import os
import sys
from pathlib import Path

from .errors import ConfigIOError, PathResolutionError

LOGGER = logging.getLogger(__name__)

CONFIG_FILE_STEM = "app_config"


def _home() -> Path:
    try:
        return Path.home()
    except RuntimeError as exc:
        raise PathResolutionError("Unable to determine the home directory") from exc


def user_config_root(platform: str | None = None) -> Path:
    """Return the base directory for per-user configuration files.

    Raises:
        PathResolutionError: when neither the environment nor the home
            directory yields a usable location.
    """
    platform = platform or sys.platform
    if platform.startswith("win"):
        local_appdata = os.environ.get("LOCALAPPDATA")
        if local_appdata:
            return Path(local_appdata)
        return _home() / "AppData" / "Local"
    if platform == "darwin":
        return _home() / "Library" / "Application Support"
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", "")
    # XDG ignores relative values.
    if xdg_config_home and os.path.isabs(xdg_config_home):
        return Path(xdg_config_home)
    return _home() / ".config"


def app_dir_name(organization_name: str, app_name: str) -> str:
    return f"com.{organization_name}.{app_name}"


def config_dir(organization_name: str, app_name: str, root: str | Path | None = None) -> Path:
    """Return the application's config directory, creating it if needed."""
    base = Path(root) if root is not None else user_config_root()
    path = base / app_dir_name(organization_name, app_name)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigIOError(f"Unable to create config directory {path}: {exc}", path) from exc
    LOGGER.debug("Using config directory %s", path)
    return path


def config_file_path(
    organization_name: str,
    app_name: str,
    extension: str = "toml",
    root: str | Path | None = None,
) -> Path:
    return config_dir(organization_name, app_name, root) / f"{CONFIG_FILE_STEM}.{extension}"
