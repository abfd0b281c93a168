"""An in-process key-value store whose entries expire."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Any, Callable, Dict, Optional, Tuple, Union

Duration = Union[float, int, timedelta]

DEFAULT_CLEANUP_INTERVAL = 5 * 60.0


def _seconds(duration: Duration) -> float:
    if isinstance(duration, timedelta):
        return duration.total_seconds()
    return float(duration)


class Backend(ABC):
    """The storage operations a cache needs."""

    @abstractmethod
    def set(self, key: str, value: Any, duration: Duration) -> None:
        """Store value under key for duration; 0 means the default expiration."""

    @abstractmethod
    def get(self, key: str) -> Tuple[Any, bool]:
        """Return (value, True) if key is present, else (None, False)."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key if present."""


class MemoryBackend(Backend):
    """A thread-safe dictionary with per-entry expiration.

    Durations are seconds or timedeltas. A zero duration passed to set means
    the backend's expiration; an effective duration of zero or less never
    expires. Expired entries are invisible at once and are swept out by
    cleanup, which also runs on its own every cleanup interval during set.
    """

    def __init__(
        self,
        name: str,
        expiration: Duration,
        random_extra_expiration_func: Optional[Callable[[], Duration]] = None,
        *,
        clock: Callable[[], float] = None,
    ) -> None:
        import time

        self.name = name
        self.default_expiration = _seconds(expiration)
        self.random_extra_expiration_func = random_extra_expiration_func
        self.cleanup_interval = self.default_expiration + DEFAULT_CLEANUP_INTERVAL
        if self.cleanup_interval <= 0:
            self.cleanup_interval = DEFAULT_CLEANUP_INTERVAL
        self._clock = clock if clock is not None else time.monotonic
        self._items: Dict[str, Tuple[Any, Optional[float]]] = {}
        self._lock = threading.Lock()
        self._last_cleanup = self._clock()

    def set(self, key: str, value: Any, duration: Duration = 0) -> None:
        seconds = _seconds(duration)
        if seconds == 0:
            seconds = self.default_expiration
        if self.random_extra_expiration_func is not None:
            seconds += _seconds(self.random_extra_expiration_func())
        now = self._clock()
        expires_at = now + seconds if seconds > 0 else None
        with self._lock:
            self._items[key] = (value, expires_at)
        if now - self._last_cleanup >= self.cleanup_interval:
            self.cleanup()

    def get(self, key: str) -> Tuple[Any, bool]:
        with self._lock:
            item = self._items.get(key)
        if item is None:
            return None, False
        value, expires_at = item
        if expires_at is not None and self._clock() > expires_at:
            return None, False
        return value, True

    def delete(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)

    def cleanup(self) -> int:
        """Remove expired entries and return how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [
                key
                for key, (_, expires_at) in self._items.items()
                if expires_at is not None and now > expires_at
            ]
            for key in expired:
                del self._items[key]
            self._last_cleanup = now
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)