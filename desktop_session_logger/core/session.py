"""Session identity: minting session ids and tracking the current session."""

from __future__ import annotations

import threading
from datetime import datetime
from typing import Callable, Optional

from loguru import logger

from desktop_session_logger.core.constants import SESSION_KEY
from desktop_session_logger.helpers.store_helpers import KeyValueStore
from desktop_session_logger.utils.file import safe_timestamp


def new_session_id(now: Optional[datetime] = None) -> str:
    """Return a session id derived from local wall-clock time.

    Unique at second granularity and safe as a single path segment,
    e.g. ``10-18-26_14-03-05``.
    """
    return safe_timestamp(now)


class SessionContext:
    """Owns the "current session" pointer for one process lifetime.

    The pointer itself lives in the persisted key-value store so that
    renderer processes started later pick up the session minted by the
    main process. A coordinator-role logger mints a fresh session at most
    once per context; every other logger reuses the pointer and only mints
    when it has never been set.
    """

    def __init__(
        self,
        store: KeyValueStore,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._store = store
        self._clock = clock
        self._lock = threading.Lock()
        self._minted = False

    @property
    def minted(self) -> bool:
        """Whether this context has already started a session."""
        return self._minted

    def current(self) -> Optional[str]:
        """Return the current session id, re-read from the store."""
        value = self._store.get(SESSION_KEY)
        return str(value) if value else None

    def start_new(self) -> str:
        """Mint a new session id and persist it as the current session."""
        with self._lock:
            session_id = new_session_id(self._clock())
            self._store.set(SESSION_KEY, session_id)
            self._minted = True
        logger.info(f"Started log session '{session_id}'.")
        return session_id

    def for_coordinator(self) -> str:
        """Session id for a main-process logger; mints on first use."""
        if not self._minted:
            return self.start_new()
        return self.current() or self.start_new()

    def ensure(self) -> str:
        """Session id for any other logger; mints only if none is set."""
        return self.current() or self.start_new()
