"""Unit tests for the utility functions."""

from datetime import datetime

import pytest

from desktop_session_logger.utils.file import safe_timestamp


@pytest.mark.unit
def test_safe_timestamp_is_path_safe() -> None:
    """Timestamps never contain path separators or colons."""
    ts = safe_timestamp(datetime(2026, 10, 18, 14, 3, 5))
    assert ts == "10-18-26_14-03-05"

    ts = safe_timestamp(datetime(2026, 1, 2, 3, 4, 5), fmt="%m/%d/%y %H:%M:%S")
    assert "/" not in ts and ":" not in ts
