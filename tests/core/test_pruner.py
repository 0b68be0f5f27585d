"""Tests for pruning expired sessions."""

import shutil
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable

import pytest

import desktop_session_logger.core.pruner as pruner
import desktop_session_logger.core.retention as retention
from desktop_session_logger.core.errors import RetentionError
from desktop_session_logger.core.pruner import prune_older_than
from desktop_session_logger.core.retention import RetentionPolicy


@pytest.mark.asyncio
async def test_default_window(
    logs_root: Path, make_session: Callable[..., Path], policy: RetentionPolicy
) -> None:
    """Sessions older than seven days go; an hour-old session stays."""
    make_session("old", timedelta(days=8))
    make_session("recent", timedelta(hours=1))

    result = await prune_older_than(logs_root, policy)

    assert result.removed == ["old"]
    assert not (logs_root / "old").exists()
    assert (logs_root / "recent" / "main.log").exists()
    assert result.message == "Logs older than 7 day(s) Cleared"


@pytest.mark.asyncio
async def test_cutoff_override(
    logs_root: Path,
    make_session: Callable[..., Path],
    policy: RetentionPolicy,
    now: float,
) -> None:
    """Everything born before a caller-supplied cutoff is removed."""
    for days in (1, 3, 5):
        make_session(f"d{days}", timedelta(days=days))

    cutoff = datetime.fromtimestamp(now - 2 * 86400)
    result = await prune_older_than(logs_root, policy, cutoff)

    assert sorted(result.removed) == ["d3", "d5"]
    assert [p.name for p in logs_root.iterdir()] == ["d1"]
    assert result.message.startswith("Logs older than ")
    assert result.message.endswith(" Cleared")


@pytest.mark.asyncio
async def test_leaves_bundles_and_hidden_entries(
    logs_root: Path, birthtimes: dict, policy: RetentionPolicy
) -> None:
    """Archive bundles and hidden entries are never pruned."""
    (logs_root / "logs-1.zip").write_bytes(b"PK")
    (logs_root / ".hidden").mkdir()
    birthtimes["logs-1.zip"] = 0
    birthtimes[".hidden"] = 0

    result = await prune_older_than(logs_root, policy)
    assert result.removed == []
    assert (logs_root / "logs-1.zip").exists()
    assert (logs_root / ".hidden").exists()


@pytest.mark.asyncio
async def test_deletion_failure_is_best_effort(
    logs_root: Path,
    make_session: Callable[..., Path],
    policy: RetentionPolicy,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """One undeletable session is reported; the rest are still removed."""
    make_session("a-stuck", timedelta(days=9))
    make_session("b-old", timedelta(days=10))
    real_rmtree = shutil.rmtree

    def _rmtree(path: Path) -> None:
        if Path(path).name == "a-stuck":
            raise PermissionError("in use")
        real_rmtree(path)

    monkeypatch.setattr(pruner.shutil, "rmtree", _rmtree)

    result = await prune_older_than(logs_root, policy)
    assert result.removed == ["b-old"]
    assert result.skipped == [("a-stuck", "in use")]
    assert (logs_root / "a-stuck").exists()
    assert "could not be removed" in result.message


@pytest.mark.asyncio
async def test_listing_failure_aborts(tmp_path: Path, policy: RetentionPolicy) -> None:
    """An unreadable logs root fails the whole operation."""
    with pytest.raises(RetentionError):
        await prune_older_than(tmp_path / "missing", policy)


@pytest.mark.asyncio
async def test_unreadable_birth_time_aborts(
    logs_root: Path,
    make_session: Callable[..., Path],
    policy: RetentionPolicy,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """A session whose age cannot be read fails the run before anything is deleted."""
    make_session("a-old", timedelta(days=9))
    make_session("b-locked", timedelta(days=9))
    faked = retention.birthtime

    def _birthtime(path: Path) -> float:
        if Path(path).name == "b-locked":
            raise PermissionError("denied")
        return faked(path)

    monkeypatch.setattr(retention, "birthtime", _birthtime)

    with pytest.raises(RetentionError):
        await prune_older_than(logs_root, policy)
    assert (logs_root / "a-old").exists()


@pytest.mark.asyncio
async def test_session_gone_before_deletion(
    logs_root: Path,
    make_session: Callable[..., Path],
    policy: RetentionPolicy,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """A session removed by someone else after classification counts as pruned."""
    make_session("a-gone", timedelta(days=9))
    make_session("b-old", timedelta(days=10))
    real_rmtree = shutil.rmtree

    def _rmtree(path: Path) -> None:
        if Path(path).name == "a-gone":
            real_rmtree(path)
            raise FileNotFoundError(2, "No such file or directory", str(path))
        real_rmtree(path)

    monkeypatch.setattr(pruner.shutil, "rmtree", _rmtree)

    result = await prune_older_than(logs_root, policy)
    assert result.removed == ["a-gone", "b-old"]
    assert result.skipped == []
    assert result.message == "Logs older than 7 day(s) Cleared"
