"""The main entry point for pytest fixtures.

This will run before any tests are executed when `import pytest` is called.
"""

from __future__ import annotations

import logging
import textwrap
import time
from datetime import timedelta
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Iterator, List
from unittest.mock import MagicMock

import pytest
from loguru import logger

import desktop_session_logger.core.retention as retention
from desktop_session_logger.core.engine import LogEngine, set_engine
from desktop_session_logger.core.logger import SessionLogger
from desktop_session_logger.core.retention import RetentionPolicy
from desktop_session_logger.helpers.store_helpers import InMemoryStore

NOW: float = time.time()


def _setup_logging() -> None:
    """Funnel stdlib logging through Loguru during tests."""

    class InterceptHandler(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            try:
                level = logger.level(record.levelname).name
            except ValueError:
                level = logging.getLevelName(record.levelno)
            logger.opt(depth=6, exception=record.exc_info, colors=False).log(
                level, record.getMessage()
            )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)


def pytest_configure(config: pytest.Config) -> None:
    """Pytest configuration hook to route stdlib logging into Loguru."""
    _setup_logging()


@pytest.fixture
def now() -> float:
    """Frozen "current time" shared by the policy and fake birth times."""
    return NOW


@pytest.fixture
def logs_root(tmp_path: Path) -> Path:
    """Logs root for one test (`<tmp>/test-app-logs`)."""
    root = tmp_path / "test-app-logs"
    root.mkdir()
    return root


@pytest.fixture
def store() -> InMemoryStore:
    """Isolated key-value store."""
    return InMemoryStore()


@pytest.fixture
def reporter() -> MagicMock:
    """Mocked crash-reporting capability."""
    return MagicMock()


@pytest.fixture
def policy() -> RetentionPolicy:
    """Seven-day policy with a frozen clock."""
    return RetentionPolicy(window=timedelta(days=7), clock=lambda: NOW)


@pytest.fixture
def engine(
    logs_root: Path, store: InMemoryStore, reporter: MagicMock, policy: RetentionPolicy
) -> Iterator[LogEngine]:
    """Engine with startup pruning off, so tests control every prune."""
    eng = LogEngine(
        logs_root=logs_root,
        store=store,
        policy=policy,
        reporter=reporter,
        auto_prune=False,
    )
    try:
        yield eng
    finally:
        set_engine(None)


@pytest.fixture
def make_logger(engine: LogEngine) -> Iterator[Callable[..., SessionLogger]]:
    """Build SessionLoggers on the test engine; all are closed on teardown."""
    created: List[SessionLogger] = []

    def _make(**kwargs: Any) -> SessionLogger:
        kwargs.setdefault("engine", engine)
        log = SessionLogger(**kwargs)
        created.append(log)
        return log

    try:
        yield _make
    finally:
        for log in created:
            log.close()


@pytest.fixture
def birthtimes(monkeypatch: pytest.MonkeyPatch) -> Dict[str, float]:
    """Fake directory birth times, keyed by entry name.

    Entries not in the mapping fall back to their real birth time.
    """
    times: Dict[str, float] = {}
    real = retention.birthtime

    def _fake(path: Path) -> float:
        name = Path(path).name
        if name in times:
            return times[name]
        return real(path)

    monkeypatch.setattr(retention, "birthtime", _fake)
    return times


@pytest.fixture
def make_session(
    logs_root: Path, birthtimes: Dict[str, float]
) -> Callable[..., Path]:
    """Create a session directory that appears `age` old."""

    def _make(
        name: str,
        age: timedelta,
        files: Iterable[str] = ("main.log",),
    ) -> Path:
        session_dir = logs_root / name
        session_dir.mkdir()
        for fname in files:
            (session_dir / fname).write_text(f"{name}/{fname}\n", encoding="utf-8")
        birthtimes[name] = NOW - age.total_seconds()
        return session_dir

    return _make


@pytest.fixture
def write_yaml(tmp_path: Path) -> Callable[[str, str], Path]:
    """Create a YAML file inside tmp_path and gives you a path to it.

    Returns:
      a function you can call with (filename, body)
    """

    def _write(filename: str, body: str) -> Path:
        file_path = tmp_path / filename
        file_path.write_text(textwrap.dedent(body).strip() + "\n", encoding="utf-8")
        return file_path

    return _write
