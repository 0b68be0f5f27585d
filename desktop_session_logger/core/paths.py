"""Log file naming policy and path resolution."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional, Union

from loguru import logger

from desktop_session_logger.core.constants import (
    DEFAULT_DOMAIN,
    DEFAULT_LOG_NAME,
    LOG_SUFFIX,
    MAIN_LOG_NAME,
    PREFIX_SEPARATOR,
    RENDERER_LOG_NAME,
)
from desktop_session_logger.core.errors import LoggerInitError
from desktop_session_logger.core.session import SessionContext


class ProcessRole(str, Enum):
    """Kind of process a logger belongs to."""

    MAIN = "main"
    RENDERER = "renderer"
    DEFAULT = "default"

    @classmethod
    def parse(cls, value: Union["ProcessRole", str, None]) -> "ProcessRole":
        """Coerce a role name; unknown names map to DEFAULT."""
        if isinstance(value, ProcessRole):
            return value
        name = (value or "").strip().lower()
        if name in ("main", "browser", "coordinator"):
            return cls.MAIN
        if name == "renderer":
            return cls.RENDERER
        return cls.DEFAULT


def log_file_name(
    role: ProcessRole,
    is_sub_log: bool = False,
    domain: Optional[str] = None,
    custom_prefix: Optional[str] = None,
) -> str:
    """Return the file name for a logger of the given role."""
    if role is ProcessRole.RENDERER:
        stem = (domain or DEFAULT_DOMAIN) if is_sub_log else RENDERER_LOG_NAME
    elif role is ProcessRole.MAIN:
        stem = MAIN_LOG_NAME
    else:
        stem = DEFAULT_LOG_NAME

    name = f"{stem}{LOG_SUFFIX}"
    if custom_prefix:
        name = f"{custom_prefix}{PREFIX_SEPARATOR}{name}"
    return name


def resolve_path(
    logs_root: Path,
    session: SessionContext,
    role: Union[ProcessRole, str, None],
    is_sub_log: bool = False,
    domain: Optional[str] = None,
    custom_prefix: Optional[str] = None,
) -> Path:
    """Compute `<logs_root>/<session>/<file>` and create the session directory.

    A main-role logger starts the session as a side effect.

    Raises:
        LoggerInitError: if the session directory cannot be created.
    """
    role = ProcessRole.parse(role)
    if role is ProcessRole.MAIN:
        session_id = session.for_coordinator()
    else:
        session_id = session.ensure()

    session_dir = Path(logs_root) / session_id
    try:
        session_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Failed to create session directory {session_dir}: {e}")
        raise LoggerInitError(session_dir, e) from e

    return session_dir / log_file_name(role, is_sub_log, domain, custom_prefix)
