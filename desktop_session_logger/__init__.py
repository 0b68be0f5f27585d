"""Per-process session logging for multi-process desktop applications."""

from .core.archiver import ArchiveResult
from .core.engine import LogEngine, get_engine, set_engine
from .core.errors import LoggerInitError, RetentionError
from .core.logger import SessionLogger
from .core.paths import ProcessRole
from .core.pruner import PruneResult
from .core.retention import RetentionPolicy
from .settings import LoggerSettings

__all__ = [
    "ArchiveResult",
    "LogEngine",
    "LoggerInitError",
    "LoggerSettings",
    "ProcessRole",
    "PruneResult",
    "RetentionError",
    "RetentionPolicy",
    "SessionLogger",
    "get_engine",
    "set_engine",
]
