"""Logging helpers for the session logger's own diagnostics."""

import sys
from pathlib import Path
from typing import Any, Optional

from loguru import logger

from desktop_session_logger.core.constants import SINK_EXTRA_KEY

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level:^7} | {file.name}:{line} | {message}"


def _is_diagnostic(record: dict[str, Any]) -> bool:
    """Session records belong to their own files, not the diagnostics sinks."""
    return SINK_EXTRA_KEY not in record["extra"]


def configure_logger(level: str = "ERROR", log_file: Optional[Path] = None) -> None:
    """Configure Loguru diagnostics output."""
    # Clear any previously added handlers
    logger.remove()

    # Console handler
    logger.add(
        sink=sys.stderr,
        level=level,
        format=LOG_FORMAT,
        filter=_is_diagnostic,
    )

    # Optional file handler: DEBUG+, rotated daily, keep 7 days, zipped
    if log_file is not None:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            sink=str(log_file),
            level="DEBUG",
            format=LOG_FORMAT,
            filter=_is_diagnostic,
            rotation="00:00",
            retention="7 days",
            compression="zip",
        )

    logger.debug(
        f"Diagnostics logger configured: stderr (level={level}+)"
        + (f", file at '{log_file}'." if log_file else ".")
    )
