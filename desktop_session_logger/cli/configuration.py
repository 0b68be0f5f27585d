"""CLI configuration management."""

from pathlib import Path
from typing import Optional

import yaml
from loguru import logger
from pydantic import ValidationError

from desktop_session_logger.settings import LoggerSettings

DEFAULT_THEME = {
    "info": "bold bright_black",
    "success": "bold green",
    "warning": "bold yellow",
    "error": "bold red",
}


def load_settings(config_path: Optional[str] = None) -> LoggerSettings:
    """Load logger settings, overridden by the `logger:` section of a YAML file."""
    if config_path is None:
        return LoggerSettings()
    p = Path(config_path)
    if not p.exists():
        logger.warning(f"Config file not found at {p}; using defaults.")
        return LoggerSettings()
    try:
        with p.open("r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load config from {config_path}: {e}")
        return LoggerSettings()

    overrides = config.get("logger") if isinstance(config, dict) else None
    if not isinstance(overrides, dict):
        overrides = {}
    try:
        return LoggerSettings(**overrides)
    except ValidationError as e:
        logger.warning(f"Invalid logger settings in {config_path}: {e}")
        return LoggerSettings()
