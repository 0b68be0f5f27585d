"""File utility functions."""

from datetime import datetime
from typing import Optional

SESSION_TS_FORMAT = "%m-%d-%y_%H-%M-%S"


def safe_timestamp(when: Optional[datetime] = None, fmt: str = SESSION_TS_FORMAT) -> str:
    """Returns a timestamp string safe for file names (no `/` or `:`)."""
    when = when or datetime.now()
    return when.strftime(fmt).replace("/", "-").replace(":", "-")
