"""Error types raised by the session log engine."""

from pathlib import Path
from typing import Optional


class LoggerInitError(RuntimeError):
    """Raised when a logger cannot establish its log file location."""

    def __init__(self, path: Path, cause: Optional[BaseException] = None) -> None:
        self.path = path
        detail = f": {cause}" if cause else ""
        super().__init__(f"Could not prepare log location '{path}'{detail}")


class RetentionError(RuntimeError):
    """Raised when sessions under the logs root cannot be listed or aged."""

    def __init__(self, path: Path, cause: Optional[BaseException] = None) -> None:
        self.path = path
        detail = f": {cause}" if cause else ""
        super().__init__(f"Could not read session data at '{path}'{detail}")
