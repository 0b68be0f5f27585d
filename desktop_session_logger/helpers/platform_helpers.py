"""Platform-specific locations and process-role detection."""

from __future__ import annotations

import multiprocessing
from pathlib import Path
from typing import Optional

import platformdirs

from desktop_session_logger.core.constants import LOGS_DIR_SUFFIX
from desktop_session_logger.core.paths import ProcessRole


def app_data_base_dir() -> Path:
    """Return the per-user application data base directory.

    - Windows: %LOCALAPPDATA%
    - macOS: ~/Library/Application Support
    - Linux: ~/.local/share (or $XDG_DATA_HOME)
    """
    return Path(platformdirs.user_data_dir())


def logs_root_for(app_name: str, base_dir: Optional[Path] = None) -> Path:
    """Return `<base>/<app_name>-logs`."""
    base = Path(base_dir) if base_dir else app_data_base_dir()
    return base / f"{app_name}{LOGS_DIR_SUFFIX}"


def default_store_path(app_name: str) -> Path:
    """Return the default location of the logger's key-value store."""
    return Path(platformdirs.user_config_dir(app_name, appauthor=False)) / "logger.json"


def detect_process_role(override: Optional[str] = None) -> ProcessRole:
    """Guess the role of the current process.

    An explicit override wins; otherwise a process with no multiprocessing
    parent is the main process and a spawned child is a renderer.
    """
    if override:
        return ProcessRole.parse(override)
    if multiprocessing.parent_process() is None:
        return ProcessRole.MAIN
    return ProcessRole.RENDERER
