"""CLI runner for managing session logs."""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta
from typing import Optional

from loguru import logger
from rich.console import Console
from rich.table import Table

from desktop_session_logger.cli.configuration import DEFAULT_THEME
from desktop_session_logger.core.engine import LogEngine


def show_sessions(engine: LogEngine, console: Console) -> int:
    """Print every session with its age; returns the number of rows shown."""
    sessions = engine.sessions()
    expiry = engine.policy.expiry()

    table = Table(title=f"Sessions in {engine.logs_root}")
    table.add_column("Session")
    table.add_column("Created")
    table.add_column("Status")
    shown = 0
    for name, born in sessions:
        if born is None:
            continue
        status = "recent" if born >= expiry else "expired"
        style = DEFAULT_THEME["success"] if status == "recent" else DEFAULT_THEME["warning"]
        created = datetime.fromtimestamp(born).isoformat(sep=" ", timespec="seconds")
        table.add_row(name, created, status, style=style)
        shown += 1

    console.print(table)
    return shown


def run_archive(engine: LogEngine, console: Console) -> None:
    """Build an archive of recent sessions and report where it was written."""
    with console.status("Archiving recent logs...", spinner="dots"):
        result = asyncio.run(engine.archive())
    console.print(
        f"Archive written to {result.path} ({len(result.added)} file(s)).",
        style=DEFAULT_THEME["success"],
    )
    for entry, reason in result.skipped:
        console.print(f"Skipped {entry}: {reason}", style=DEFAULT_THEME["warning"])


def run_prune(engine: LogEngine, console: Console, days: Optional[float] = None) -> None:
    """Prune expired sessions, optionally with a custom age in days."""
    cutoff = None
    if days is not None:
        cutoff = datetime.now() - timedelta(days=days)
        logger.debug(f"Pruning with custom cutoff {cutoff.isoformat()}")
    result = asyncio.run(engine.prune(cutoff))
    console.print(result.message, style=DEFAULT_THEME["success"])
    for session, reason in result.skipped:
        console.print(f"Could not remove {session}: {reason}", style=DEFAULT_THEME["error"])


def set_logging(engine: LogEngine, console: Console, enabled: bool) -> None:
    """Persist the logging-enabled flag."""
    message = engine.enable_logging() if enabled else engine.disable_logging()
    console.print(message, style=DEFAULT_THEME["info"])
