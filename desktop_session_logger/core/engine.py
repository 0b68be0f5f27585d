"""Shared engine that every `SessionLogger` in a process talks to.

The engine owns the logs root, the retention policy, the persisted store,
the logging switch and the session pointer. Loggers receive it explicitly;
`get_engine()` returns a lazily-built process default for callers that do
not care.
"""

from __future__ import annotations

import asyncio
import shutil
import threading
from datetime import timedelta
from pathlib import Path
from typing import Optional, Union

from loguru import logger

from desktop_session_logger.core.archiver import ArchiveResult, build_archive
from desktop_session_logger.core.errors import LoggerInitError
from desktop_session_logger.core.pruner import PruneResult, prune_older_than, prune_sync
from desktop_session_logger.core.retention import (
    Cutoff,
    RetentionPolicy,
    age_of,
    list_sessions,
)
from desktop_session_logger.core.session import SessionContext
from desktop_session_logger.core.sink import LoggingSwitch
from desktop_session_logger.helpers.platform_helpers import (
    default_store_path,
    logs_root_for,
)
from desktop_session_logger.helpers.reporting_helpers import ErrorReporter
from desktop_session_logger.helpers.store_helpers import JsonFileStore, KeyValueStore
from desktop_session_logger.settings import LoggerSettings

StartupPrune = Union["asyncio.Task[PruneResult]", threading.Thread]


class LogEngine:
    """Coordinator for session identity and bulk retention operations."""

    def __init__(
        self,
        logs_root: Union[str, Path],
        store: KeyValueStore,
        policy: Optional[RetentionPolicy] = None,
        reporter: Optional[ErrorReporter] = None,
        session: Optional[SessionContext] = None,
        process_role: Optional[str] = None,
        auto_prune: bool = True,
        compress_level: int = 6,
    ) -> None:
        self.logs_root = Path(logs_root)
        self.store = store
        self.policy = policy or RetentionPolicy()
        self.reporter = reporter
        self.session = session or SessionContext(store)
        self.switch = LoggingSwitch(store)
        self.process_role = process_role
        self.auto_prune = auto_prune
        self.compress_level = compress_level
        self._pending: set[asyncio.Task[PruneResult]] = set()

    @classmethod
    def from_settings(
        cls,
        settings: Optional[LoggerSettings] = None,
        reporter: Optional[ErrorReporter] = None,
        store: Optional[KeyValueStore] = None,
    ) -> "LogEngine":
        """Build an engine from `LoggerSettings` (env vars by default)."""
        settings = settings or LoggerSettings()
        if store is None:
            store = JsonFileStore(
                settings.store_path or default_store_path(settings.app_name)
            )
        return cls(
            logs_root=logs_root_for(settings.app_name, settings.base_dir),
            store=store,
            policy=RetentionPolicy(window=timedelta(days=settings.expiry_days)),
            reporter=reporter,
            process_role=settings.process_role,
            auto_prune=settings.auto_prune,
            compress_level=settings.compress_level,
        )

    # ---------- setup ----------
    def ensure_root(self) -> Path:
        """Create the logs root if needed.

        Raises:
            LoggerInitError: if the directory cannot be created.
        """
        try:
            self.logs_root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Failed to create logs root {self.logs_root}: {e}")
            raise LoggerInitError(self.logs_root, e) from e
        return self.logs_root

    # ---------- retention ----------
    def sessions(self) -> list[tuple[str, Optional[float]]]:
        """List `(session, birth time)` pairs under the logs root."""
        return [(s, age_of(self.logs_root, s)) for s in list_sessions(self.logs_root)]

    async def prune(self, cutoff: Optional[Cutoff] = None) -> PruneResult:
        return await prune_older_than(self.logs_root, self.policy, cutoff)

    async def archive(self) -> ArchiveResult:
        return await build_archive(self.logs_root, self.policy, self.compress_level)

    async def clear_archive(self, path: Union[str, Path]) -> None:
        """Delete an archive bundle; a missing path is not an error."""
        await asyncio.to_thread(_remove_path, Path(path))

    def schedule_prune(self) -> Optional[StartupPrune]:
        """Start a prune pass without waiting for it.

        Runs as a task on the running event loop, or on a daemon thread
        when the caller has no loop. Failures are logged, never raised.
        """
        if not self.auto_prune:
            return None
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            thread = threading.Thread(
                target=self._prune_in_background, name="session-log-prune", daemon=True
            )
            thread.start()
            return thread

        task = loop.create_task(self.prune())
        self._pending.add(task)
        task.add_done_callback(self._on_prune_done)
        return task

    def _prune_in_background(self) -> None:
        try:
            prune_sync(self.logs_root, self.policy)
        except Exception as e:
            logger.warning(f"Startup prune of {self.logs_root} failed: {e}")

    def _on_prune_done(self, task: "asyncio.Task[PruneResult]") -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning(f"Startup prune of {self.logs_root} failed: {exc}")

    # ---------- switch ----------
    def enable_logging(self) -> str:
        return self.switch.enable()

    def disable_logging(self) -> str:
        return self.switch.disable()


def _remove_path(path: Path) -> None:
    if path.is_dir():
        shutil.rmtree(path)
    else:
        path.unlink(missing_ok=True)


_engine: Optional[LogEngine] = None
_engine_lock = threading.Lock()


def get_engine() -> LogEngine:
    """Return the process-default engine (lazy init from env settings)."""
    global _engine
    with _engine_lock:
        if _engine is None:
            _engine = LogEngine.from_settings()
        return _engine


def set_engine(engine: Optional[LogEngine]) -> None:
    """Replace (or with None, reset) the process-default engine."""
    global _engine
    with _engine_lock:
        _engine = engine
