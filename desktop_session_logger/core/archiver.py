"""Archiver: bundle the log files of recent sessions into one zip file."""

from __future__ import annotations

import asyncio
import time
import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from loguru import logger

from desktop_session_logger.core.constants import ARCHIVE_PREFIX, ARCHIVE_SUFFIX
from desktop_session_logger.core.retention import (
    RetentionPolicy,
    classify_sessions,
    list_entries,
)
from desktop_session_logger.core.errors import RetentionError


@dataclass
class ArchiveResult:
    """Outcome of one archive run.

    `added` holds `session/file` entry names; `skipped` holds
    `(entry, reason)` pairs for files that could not be read.
    """

    path: Path
    added: List[str] = field(default_factory=list)
    skipped: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.skipped


def archive_name(now_ms: Optional[int] = None) -> str:
    """`logs-<epoch millis>.zip`"""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{ARCHIVE_PREFIX}{now_ms}{ARCHIVE_SUFFIX}"


def next_archive_path(root: Path, now_ms: int) -> Path:
    """First free `logs-<ms>.zip` in `root` at or after `now_ms`.

    Bundles made within the same millisecond take the following free
    millisecond, so every name still parses as a creation time.
    """
    while (root / archive_name(now_ms)).exists():
        now_ms += 1
    return root / archive_name(now_ms)


def _session_files(root: Path, session: str) -> List[str]:
    session_dir = root / session
    try:
        names = list_entries(session_dir)
    except RetentionError:
        # session pruned between listing and reading it
        if not session_dir.exists():
            return []
        raise
    return [n for n in names if (session_dir / n).is_file()]


def _fill_archive(
    zf: zipfile.ZipFile, root: Path, sessions: List[str], result: ArchiveResult
) -> None:
    for session in sessions:
        for name in _session_files(root, session):
            entry = f"{session}/{name}"
            try:
                zf.write(root / session / name, arcname=entry)
            except OSError as e:
                logger.warning(f"Skipping {entry} in archive: {e}")
                result.skipped.append((entry, str(e)))
                continue
            result.added.append(entry)


def build_archive_sync(
    root: Path, policy: RetentionPolicy, compresslevel: int = 6
) -> ArchiveResult:
    """Write every log file of every recent session into a new bundle.

    Unreadable files (including ones deleted mid-run) are recorded in
    `ArchiveResult.skipped` instead of failing the archive. If the run
    aborts, the partly written bundle is removed before the error propagates.
    """
    root = Path(root)
    cutoff = policy.expiry()
    recent, _ = classify_sessions(root, cutoff)
    out = next_archive_path(root, int(policy.clock() * 1000))
    result = ArchiveResult(path=out)

    logger.debug(f"Archiving {len(recent)} session(s) into {out}")
    zf = zipfile.ZipFile(
        out, "x", compression=zipfile.ZIP_DEFLATED, compresslevel=compresslevel
    )
    try:
        with zf:
            _fill_archive(zf, root, recent, result)
    except BaseException:
        logger.warning(f"Archive run aborted, removing partial bundle {out}")
        out.unlink(missing_ok=True)
        raise

    logger.info(
        f"Wrote log archive {out} ({len(result.added)} file(s), "
        f"{len(result.skipped)} skipped)."
    )
    return result


async def build_archive(
    root: Path, policy: RetentionPolicy, compresslevel: int = 6
) -> ArchiveResult:
    """Async wrapper; the filesystem walk and compression run off-loop."""
    return await asyncio.to_thread(build_archive_sync, root, policy, compresslevel)
