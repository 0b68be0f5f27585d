"""Record sink: gated, per-instance file output built on loguru."""

from __future__ import annotations

import itertools
import weakref
from pathlib import Path
from pprint import pformat
from typing import Any, Iterable

from loguru import logger

from desktop_session_logger.core.constants import (
    LEVEL_LABELS,
    LINE_TIME_FORMAT,
    LOGGING_ENABLED_KEY,
    SINK_EXTRA_KEY,
    VALUE_SEPARATOR,
)
from desktop_session_logger.helpers.store_helpers import KeyValueStore

_sink_ids = itertools.count(1)


def _accept_only(sink_id: int):
    def _filter(record: dict[str, Any]) -> bool:
        return record["extra"].get(SINK_EXTRA_KEY) == sink_id

    return _filter


def _detach(handler_id: int) -> None:
    try:
        logger.remove(handler_id)
    except ValueError:
        # already dropped by a blanket logger.remove()
        pass


class LoggingSwitch:
    """Process-wide "logging enabled" flag backed by the key-value store.

    Never cached: every call to `is_enabled` reads the store again.
    """

    def __init__(self, store: KeyValueStore, key: str = LOGGING_ENABLED_KEY) -> None:
        self._store = store
        self._key = key
        if self._store.get(self._key) is None:
            self._store.set(self._key, True)

    def is_enabled(self) -> bool:
        return bool(self._store.get(self._key, True))

    def enable(self) -> str:
        self._store.set(self._key, True)
        return "Logging Enabled"

    def disable(self) -> str:
        self._store.set(self._key, False)
        return "Logging Disabled"


def render_value(value: Any) -> str:
    """Render one value to its inspection string."""
    hook = getattr(value, "__diagnostic__", None)
    if callable(hook):
        return str(hook())
    return pformat(value)


def render_message(values: Iterable[Any]) -> str:
    """Render and join a sequence of values into one log message."""
    return VALUE_SEPARATOR.join(render_value(v) for v in values)


def _format_line(record: dict[str, Any]) -> str:
    label = LEVEL_LABELS.get(record["level"].name, record["level"].name.lower())
    return LINE_TIME_FORMAT + "::" + label + "::{message}\n{exception}"


class RecordSink:
    """Appends formatted lines to one file, gated by a `LoggingSwitch`.

    Each sink registers its own loguru file handler that only accepts
    records bound to this sink, so several sinks can live in one process.
    The file is created on the first write. The handler is detached by
    `close()` or, failing that, when the sink is garbage-collected.
    """

    def __init__(self, path: Path, switch: LoggingSwitch) -> None:
        self.path = Path(path)
        self.switch = switch
        self.sink_id = next(_sink_ids)
        self._logger = logger.bind(**{SINK_EXTRA_KEY: self.sink_id})
        # the filter must not reference self, or loguru keeps the sink alive
        self._handler_id: int | None = logger.add(
            str(self.path),
            level="DEBUG",
            format=_format_line,
            filter=_accept_only(self.sink_id),
            mode="a",
            encoding="utf-8",
            delay=True,
            colorize=False,
            catch=True,
        )
        self._finalizer = weakref.finalize(self, _detach, self._handler_id)

    def write(self, level: str, content: Iterable[Any]) -> bool:
        """Write one record; returns False when logging is disabled."""
        if not self.switch.is_enabled():
            return False
        self.write_message(level, render_message(content))
        return True

    def write_message(self, level: str, message: str) -> None:
        """Write an already-rendered message, bypassing the gate."""
        if self._handler_id is None:
            raise RuntimeError(f"Sink for {self.path} is closed")
        self._logger.log(level, message)

    def close(self) -> None:
        """Detach the file handler."""
        self._finalizer()
        self._handler_id = None
