"""Retention policy and classification of session directories by age."""

from __future__ import annotations

import os
import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from loguru import logger

from desktop_session_logger.core.constants import (
    ARCHIVE_SUFFIX,
    DEFAULT_RETENTION_WINDOW,
)
from desktop_session_logger.core.errors import RetentionError

Cutoff = Union[datetime, float, int]


def is_listable(name: str) -> bool:
    """False for hidden entries and archive bundles."""
    return not (name.startswith(".") or name.endswith(ARCHIVE_SUFFIX))


def birthtime(path: Path) -> float:
    """Creation time of `path` in epoch seconds.

    Uses `st_birthtime` where the platform records it and falls back to
    `st_ctime` otherwise.
    """
    st = os.stat(path)
    return float(getattr(st, "st_birthtime", st.st_ctime))


def to_epoch(cutoff: Cutoff) -> float:
    """Normalise a cutoff given as datetime or epoch seconds."""
    if isinstance(cutoff, datetime):
        return cutoff.timestamp()
    return float(cutoff)


@dataclass(frozen=True)
class RetentionPolicy:
    """Age threshold shared by archival (keep recent) and pruning (drop old)."""

    window: timedelta = DEFAULT_RETENTION_WINDOW
    clock: Callable[[], float] = field(default=time.time, compare=False)

    @property
    def days(self) -> float:
        return self.window.total_seconds() / 86400

    def expiry(self) -> float:
        """Epoch seconds before which a session counts as expired."""
        return self.clock() - self.window.total_seconds()


def list_entries(directory: Path) -> List[str]:
    """Sorted names in `directory`, minus hidden entries and bundles.

    Raises:
        RetentionError: if the directory cannot be read.
    """
    try:
        names = os.listdir(directory)
    except OSError as e:
        logger.error(f"Failed to list {directory}: {e}")
        raise RetentionError(Path(directory), e) from e
    return sorted(n for n in names if is_listable(n))


def list_sessions(root: Path) -> List[str]:
    """Names of the session directories under the logs root."""
    root = Path(root)
    return [n for n in list_entries(root) if (root / n).is_dir()]


def age_of(root: Path, session: str) -> Optional[float]:
    """Birth time of a session directory, or None if it no longer exists.

    Raises:
        RetentionError: on any other stat failure.
    """
    path = Path(root) / session
    try:
        return birthtime(path)
    except FileNotFoundError:
        logger.debug(f"Session {session} vanished before it could be aged.")
        return None
    except OSError as e:
        logger.error(f"Failed to read birth time of {path}: {e}")
        raise RetentionError(path, e) from e


def classify_sessions(
    root: Path, cutoff: float
) -> Tuple[List[str], List[str]]:
    """Split sessions into (recent, expired) around `cutoff`."""
    recent: List[str] = []
    expired: List[str] = []
    for session in list_sessions(root):
        born = age_of(root, session)
        if born is None:
            continue
        (recent if born >= cutoff else expired).append(session)
    return recent, expired
