"""Crash/error reporting capability used by `SessionLogger.error`."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from loguru import logger


@runtime_checkable
class ErrorReporter(Protocol):
    """Anything that can forward an error to a crash-reporting service."""

    def report(self, error: BaseException) -> None:
        """Send `error` to the reporting backend."""
        ...


class LoguruReporter:
    """Reporter that forwards errors to the diagnostics logger.

    Handy during development when no crash-reporting service is wired up.
    """

    def __init__(self, level: str = "ERROR") -> None:
        self.level = level

    def report(self, error: BaseException) -> None:
        logger.opt(exception=error).log(self.level, f"Reported error: {error}")
