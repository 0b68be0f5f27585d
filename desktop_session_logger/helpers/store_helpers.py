"""Helpers for the persisted key-value store.

The engine only needs `get(key)` / `set(key, value)`. `JsonFileStore` keeps
the values in a small JSON document shared by every process of the app and
re-reads it on each `get`, so a flag flipped in one process is seen by the
next write in another.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Union, runtime_checkable

from loguru import logger


@runtime_checkable
class KeyValueStore(Protocol):
    """Minimal persisted key-value capability."""

    def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value for `key`, or `default`."""
        ...

    def set(self, key: str, value: Any) -> None:
        """Persist `value` under `key`."""
        ...


class InMemoryStore:
    """Process-local store; useful for tests and embedded use."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self._data: Dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value


class JsonFileStore:
    """JSON document on disk, written atomically."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> Dict[str, Any]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        try:
            data = json.loads(text) if text.strip() else {}
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring unreadable store file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str, default: Any = None) -> Any:
        return self._read().get(key, default)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2)
                os.replace(tmp, self.path)
            except BaseException:
                Path(tmp).unlink(missing_ok=True)
                raise
