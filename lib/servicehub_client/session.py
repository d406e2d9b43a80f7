from __future__ import annotations

import logging
import threading
from typing import Protocol, runtime_checkable

log = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"

# One lock for every store: clients built separately may share a backing store.
_INVALIDATE_LOCK = threading.Lock()


@runtime_checkable
class SessionStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemorySessionStore:
    """Dict-backed store for tests and short-lived processes."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def remove(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)


def read_token(store: SessionStore | None) -> str | None:
    """Current token, or None when absent or the store cannot be read."""
    if store is None:
        return None
    try:
        token = store.get(TOKEN_KEY)
    except Exception:
        log.warning("session store unreadable, sending request without token", exc_info=True)
        return None
    if not isinstance(token, str) or not token.strip():
        return None
    return token.strip()


def invalidate_session(store: SessionStore | None) -> None:
    """Drop token and cached user. Safe to call on an already-cleared store."""
    if store is None:
        return
    with _INVALIDATE_LOCK:
        for key in (TOKEN_KEY, USER_KEY):
            try:
                store.remove(key)
            except Exception:
                log.warning("failed to remove %r from session store", key, exc_info=True)
