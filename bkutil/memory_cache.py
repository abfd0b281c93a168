"""A read-through in-memory cache that fills missing keys from a retrieve function."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Tuple

from bkutil.keys import Key
from bkutil.memory_backend import Backend, Duration, MemoryBackend

RetrieveFunc = Callable[[Key], Any]

# A failed retrieval is remembered this long (seconds) before it is retried.
EMPTY_CACHE_EXPIRATION = 5.0

MOCK_CACHE_EXPIRATION = 5 * 60.0


@dataclass(frozen=True)
class _EmptyCache:
    """Placeholder stored for a key whose retrieval failed."""

    err: Exception


class _Call:
    def __init__(self) -> None:
        self.done = threading.Event()
        self.value: Any = None
        self.error: Optional[Exception] = None


class _SingleFlight:
    """Runs at most one retrieval per key at a time; concurrent callers share it."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._calls: Dict[str, _Call] = {}

    def do(self, key: str, fn: Callable[[], Any]) -> Any:
        with self._lock:
            call = self._calls.get(key)
            leader = call is None
            if leader:
                call = _Call()
                self._calls[key] = call
        if leader:
            try:
                call.value = fn()
            except Exception as exc:
                call.error = exc
            finally:
                with self._lock:
                    self._calls.pop(key, None)
                call.done.set()
        else:
            call.done.wait()
        if call.error is not None:
            raise call.error
        return call.value


class BaseCache:
    """A cache that stores values in a backend and retrieves missing ones.

    A failing retrieval raises its error, and the error itself is cached for
    a short time so that repeated reads of a broken key do not hammer the
    source. When the cache is disabled every read goes to the retrieve
    function and nothing is stored.
    """

    def __init__(
        self, disabled: bool, retrieve_func: RetrieveFunc, backend: Backend
    ) -> None:
        self._disabled = disabled
        self._retrieve_func = retrieve_func
        self._backend = backend
        self._flight = _SingleFlight()

    @property
    def disabled(self) -> bool:
        """True if the cache is disabled."""
        return self._disabled

    def exists(self, key: Key) -> bool:
        """Return True if the backend holds an entry for key."""
        _, found = self._backend.get(key.key())
        return found

    def get(self, key: Key) -> Any:
        """Return the value for key, retrieving and caching it if missing."""
        if self._disabled:
            return self._retrieve_func(key)

        value, found = self._backend.get(key.key())
        if found:
            if isinstance(value, _EmptyCache):
                raise value.err
            return value
        return self._retrieve(key)

    def _retrieve(self, key: Key) -> Any:
        k = key.key()
        try:
            value = self._flight.do(k, lambda: self._retrieve_func(key))
        except Exception as exc:
            self._backend.set(k, _EmptyCache(exc), EMPTY_CACHE_EXPIRATION)
            raise
        self._backend.set(k, value, 0)
        return value

    def set(self, key: Key, data: Any) -> None:
        """Store data under key with the default expiration."""
        self._backend.set(key.key(), data, 0)

    def delete(self, key: Key) -> None:
        """Remove the entry for key."""
        self._backend.delete(key.key())

    def direct_get(self, key: Key) -> Tuple[Any, bool]:
        """Return (value, found) from the backend without retrieving."""
        return self._backend.get(key.key())

    def _get_typed(self, key: Key, kind: str, check: Callable[[Any], bool]) -> Any:
        value = self.get(key)
        if not check(value):
            raise TypeError(
                f"not a {kind} value. key={key.key()}, "
                f"value={value!r}({type(value).__name__})"
            )
        return value

    def get_string(self, key: Key) -> str:
        """Return the value for key; raise TypeError if it is not a str."""
        return self._get_typed(key, "string", lambda v: isinstance(v, str))

    def get_bool(self, key: Key) -> bool:
        """Return the value for key; raise TypeError if it is not a bool."""
        return self._get_typed(key, "bool", lambda v: isinstance(v, bool))

    def get_int(self, key: Key) -> int:
        """Return the value for key; raise TypeError if it is not an int."""
        return self._get_typed(
            key, "int", lambda v: isinstance(v, int) and not isinstance(v, bool)
        )

    def get_float(self, key: Key) -> float:
        """Return the value for key; raise TypeError if it is not a float."""
        return self._get_typed(key, "float", lambda v: isinstance(v, float))

    def get_time(self, key: Key) -> datetime:
        """Return the value for key; raise TypeError if it is not a datetime."""
        return self._get_typed(key, "time", lambda v: isinstance(v, datetime))


def new_cache(
    name: str,
    disabled: bool,
    retrieve_func: RetrieveFunc,
    expiration: Duration,
    random_extra_expiration_func: Optional[Callable[[], Duration]] = None,
) -> BaseCache:
    """Create a cache backed by a MemoryBackend with the given expiration."""
    backend = MemoryBackend(name, expiration, random_extra_expiration_func)
    return BaseCache(disabled, retrieve_func, backend)


def new_mock_cache(retrieve_func: RetrieveFunc) -> BaseCache:
    """Create an enabled memory cache with a five-minute expiration, for tests."""
    backend = MemoryBackend("mockCache", MOCK_CACHE_EXPIRATION, None)
    return BaseCache(False, retrieve_func, backend)