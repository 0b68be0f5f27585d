"""SessionLogger: the per-instance logging facade.

Each instance resolves one log file inside the current session and writes
to it through a `RecordSink`. Archive, prune and enable/disable requests are
forwarded to the shared `LogEngine` and act on the whole logs root.

Example:
    log = SessionLogger(file_name="sync", role="renderer")
    log.info("loaded", {"items": 3})
    path = await log.get_log_archive()
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from loguru import logger

from desktop_session_logger.core.engine import LogEngine, StartupPrune, get_engine
from desktop_session_logger.core.paths import ProcessRole, resolve_path
from desktop_session_logger.core.retention import Cutoff
from desktop_session_logger.core.sink import RecordSink, render_message
from desktop_session_logger.helpers.platform_helpers import detect_process_role


class SessionLogger:
    """Leveled logger bound to one file of the current session.

    Args:
        file_name: Optional prefix, producing e.g. `sync-renderer.log`.
        is_webview: Log to a per-domain sub-log; also suppresses error reporting.
        domain: Sub-log name used when `is_webview` is set (default "webview").
        role: Process role; detected from the environment when omitted.
        engine: Shared engine; defaults to the process-wide one.

    Raises:
        LoggerInitError: if the logs root or session directory cannot be created.
    """

    def __init__(
        self,
        file_name: str = "",
        is_webview: bool = False,
        domain: Optional[str] = None,
        role: Union[ProcessRole, str, None] = None,
        engine: Optional[LogEngine] = None,
    ) -> None:
        self.engine = engine or get_engine()
        self.is_webview = is_webview
        self.role = (
            ProcessRole.parse(role)
            if role is not None
            else detect_process_role(self.engine.process_role)
        )

        self.engine.ensure_root()
        self.startup_prune: Optional[StartupPrune] = self.engine.schedule_prune()
        self.path: Path = resolve_path(
            self.engine.logs_root,
            self.engine.session,
            self.role,
            is_sub_log=is_webview,
            domain=domain,
            custom_prefix=file_name or None,
        )
        self._sink = RecordSink(self.path, self.engine.switch)
        logger.debug(f"SessionLogger ready: role={self.role.value} path={self.path}")

    def __repr__(self) -> str:
        return f"SessionLogger(role={self.role.value!r}, path='{self.path}')"

    # ---------- leveled logging ----------
    def _write(self, level: str, content: tuple[Any, ...]) -> None:
        try:
            self._sink.write(level, content)
        except Exception as e:
            logger.warning(f"Dropped {level} record for {self.path}: {e}")

    def debug(self, *content: Any) -> None:
        self._write("DEBUG", content)

    def log(self, *content: Any) -> None:
        self._write("INFO", content)

    def info(self, *content: Any) -> None:
        self._write("INFO", content)

    def warn(self, *content: Any) -> None:
        self._write("WARNING", content)

    def error(self, *content: Any) -> None:
        """Log at error level and, outside webviews, report the error."""
        try:
            message = render_message(content)
        except Exception as e:
            logger.warning(f"Could not render ERROR record for {self.path}: {e}")
            message = f"<unrenderable: {type(e).__name__}: {e}>"
        try:
            if self.engine.switch.is_enabled():
                self._sink.write_message("ERROR", message)
        except Exception as e:
            logger.warning(f"Dropped ERROR record for {self.path}: {e}")

        reporter = self.engine.reporter
        if reporter is None or self.is_webview:
            return
        try:
            reporter.report(RuntimeError(message))
        except Exception as e:
            logger.warning(f"Error reporter failed: {e}")

    # ---------- engine operations ----------
    async def prune_old_logs(self, cutoff: Optional[Cutoff] = None) -> str:
        """Delete sessions older than `cutoff` (default: the retention window)."""
        result = await self.engine.prune(cutoff)
        return result.message

    async def get_log_archive(self) -> Path:
        """Bundle all recent sessions and return the bundle path."""
        result = await self.engine.archive()
        return result.path

    async def clear_log_archive(self, path: Union[str, Path]) -> None:
        await self.engine.clear_archive(path)

    def enable_logging(self) -> str:
        return self.engine.enable_logging()

    def disable_logging(self) -> str:
        return self.engine.disable_logging()

    def close(self) -> None:
        """Detach this logger's file handler."""
        self._sink.close()
