"""Pruner: permanently delete sessions older than a cutoff."""

from __future__ import annotations

import asyncio
import shutil
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

from loguru import logger

from desktop_session_logger.core.retention import (
    Cutoff,
    RetentionPolicy,
    classify_sessions,
    to_epoch,
)


@dataclass
class PruneResult:
    """Outcome of one prune run.

    `removed` lists deleted session names; `skipped` holds
    `(session, reason)` pairs for sessions that could not be deleted.
    """

    cutoff: float
    days: Optional[float] = None
    removed: List[str] = field(default_factory=list)
    skipped: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def message(self) -> str:
        if self.days is not None:
            text = f"Logs older than {self.days:g} day(s) Cleared"
        else:
            when = datetime.fromtimestamp(self.cutoff).isoformat(timespec="seconds")
            text = f"Logs older than {when} Cleared"
        if self.skipped:
            text += f" ({len(self.skipped)} session(s) could not be removed)"
        return text

    def __str__(self) -> str:
        return self.message


def prune_sync(
    root: Path, policy: RetentionPolicy, cutoff: Optional[Cutoff] = None
) -> PruneResult:
    """Delete every session born before the cutoff.

    The cutoff defaults to the policy's expiry. Listing or aging failures
    propagate as `RetentionError`; a session that fails to delete is
    recorded in `PruneResult.skipped` and the run continues.
    """
    root = Path(root)
    if cutoff is None:
        result = PruneResult(cutoff=policy.expiry(), days=policy.days)
    else:
        result = PruneResult(cutoff=to_epoch(cutoff))

    _, expired = classify_sessions(root, result.cutoff)
    for session in expired:
        try:
            shutil.rmtree(root / session)
        except FileNotFoundError:
            logger.debug(f"Session {session} already removed.")
        except OSError as e:
            logger.warning(f"Failed to remove expired session {session}: {e}")
            result.skipped.append((session, str(e)))
            continue
        result.removed.append(session)

    if result.removed or result.skipped:
        logger.info(
            f"Pruned {len(result.removed)} session(s) from {root}; "
            f"{len(result.skipped)} skipped."
        )
    return result


async def prune_older_than(
    root: Path, policy: RetentionPolicy, cutoff: Optional[Cutoff] = None
) -> PruneResult:
    """Async wrapper; deletion runs off-loop."""
    return await asyncio.to_thread(prune_sync, root, policy, cutoff)
