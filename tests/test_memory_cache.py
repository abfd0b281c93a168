import threading
import time
from datetime import datetime

import pytest

from bkutil.keys import StringKey
from bkutil.memory_backend import MemoryBackend
from bkutil.memory_cache import BaseCache, new_cache, new_mock_cache


class RetrieveError(Exception):
    pass


_VALUES = {
    "a": "1",
    "b": "2",
    "bool": True,
    "int": 1,
    "float": 1.0,
    "time": datetime.min,
}


def retrieve_test(key):
    k = key.key()
    if k == "error":
        raise RetrieveError("error")
    return _VALUES.get(k, "")


def retrieve_error(key):
    raise RetrieveError("test error")


def retrieve_ok(key):
    return "ok"


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture
def backend():
    return MemoryBackend("test", 300, None)


@pytest.fixture
def cache(backend):
    return BaseCache(False, retrieve_test, backend)


def test_disabled_flag(cache):
    assert cache.disabled is False


def test_get_twice(cache):
    key = StringKey("a")
    assert cache.get(key) == "1"
    assert cache.get(key) == "1"


def test_set_then_get_string(cache):
    key = StringKey("s")
    cache.set(key, "1")
    assert cache.get_string(key) == "1"


def test_disabled_then_get(backend):
    cache = BaseCache(True, retrieve_test, backend)
    key = StringKey("a")
    assert cache.disabled is True
    assert cache.get(key) == "1"
    assert cache.get(key) == "1"
    assert cache.exists(key) is False


def test_exists(cache):
    key = StringKey("a")
    assert cache.exists(key) is False
    cache.get(key)
    assert cache.exists(key) is True


def test_direct_get(cache):
    key = StringKey("a")
    assert cache.direct_get(key) == (None, False)
    cache.get(key)
    assert cache.direct_get(key) == ("1", True)


def test_delete(cache):
    key = StringKey("a")
    cache.get(key)
    assert cache.exists(key) is True
    cache.delete(key)
    assert cache.exists(key) is False


def test_get_string(cache):
    assert cache.get_string(StringKey("a")) == "1"
    with pytest.raises(TypeError, match="not a string value"):
        cache.get_string(StringKey("int"))
    with pytest.raises(RetrieveError):
        cache.get_string(StringKey("error"))


def test_get_bool(cache):
    assert cache.get_bool(StringKey("bool")) is True
    with pytest.raises(TypeError):
        cache.get_bool(StringKey("int"))
    with pytest.raises(RetrieveError):
        cache.get_bool(StringKey("error"))


def test_get_int(cache):
    assert cache.get_int(StringKey("int")) == 1
    with pytest.raises(TypeError, match="not a int value"):
        cache.get_int(StringKey("bool"))
    with pytest.raises(TypeError):
        cache.get_int(StringKey("a"))
    with pytest.raises(RetrieveError):
        cache.get_int(StringKey("error"))


def test_get_float(cache):
    assert cache.get_float(StringKey("float")) == 1.0
    with pytest.raises(TypeError):
        cache.get_float(StringKey("a"))
    with pytest.raises(TypeError):
        cache.get_float(StringKey("int"))
    with pytest.raises(RetrieveError):
        cache.get_float(StringKey("error"))


def test_get_time(cache):
    assert cache.get_time(StringKey("time")) == datetime.min
    with pytest.raises(TypeError):
        cache.get_time(StringKey("int"))
    with pytest.raises(RetrieveError):
        cache.get_time(StringKey("error"))


def test_get_error_is_cached_and_same(cache):
    key = StringKey("error")
    with pytest.raises(RetrieveError) as first:
        cache.get(key)
    with pytest.raises(RetrieveError) as second:
        cache.get(key)
    assert first.value is second.value
    assert cache.exists(key) is True


def test_retrieve_error_disabled(backend):
    cache = BaseCache(True, retrieve_error, backend)
    with pytest.raises(RetrieveError, match="test error"):
        cache.get(StringKey("a"))


def test_cached_error_expires_after_five_seconds():
    clock = FakeClock()
    backend = MemoryBackend("test", 300, None, clock=clock)
    calls = []

    def flaky(key):
        calls.append(key.key())
        if len(calls) == 1:
            raise RetrieveError("first")
        return "recovered"

    cache = BaseCache(False, flaky, backend)
    key = StringKey("k")
    with pytest.raises(RetrieveError):
        cache.get(key)
    clock.now += 4
    with pytest.raises(RetrieveError):
        cache.get(key)
    assert len(calls) == 1
    clock.now += 2
    assert cache.get(key) == "recovered"
    assert len(calls) == 2


def test_value_cached_until_expiration():
    clock = FakeClock()
    backend = MemoryBackend("test", 60, None, clock=clock)
    counter = {"n": 0}

    def counting(key):
        counter["n"] += 1
        return counter["n"]

    cache = BaseCache(False, counting, backend)
    key = StringKey("x")
    assert cache.get(key) == 1
    clock.now += 30
    assert cache.get(key) == 1
    clock.now += 31
    assert cache.get(key) == 2


def test_concurrent_gets_share_one_retrieval(backend):
    release = threading.Event()
    calls = []
    lock = threading.Lock()

    def slow(key):
        with lock:
            calls.append(key.key())
        release.wait(5)
        return "shared"

    cache = BaseCache(False, slow, backend)
    results = []

    def worker():
        results.append(cache.get(StringKey("slow")))

    threads = [threading.Thread(target=worker) for _ in range(5)]
    for t in threads:
        t.start()
    time.sleep(0.2)
    release.set()
    for t in threads:
        t.join(5)
    value = cache.get(StringKey("slow"))
    assert value == "shared"
    assert results == ["shared"] * 5
    assert calls == ["slow"]
    assert cache.direct_get(StringKey("slow")) == ("shared", True)


def test_new_cache():
    cache = new_cache("test", False, retrieve_ok, 300, None)
    key = StringKey("anything")
    assert cache.get(key) == "ok"
    assert cache.exists(key) is True
    assert cache.disabled is False


def test_new_cache_disabled():
    cache = new_cache("test", True, retrieve_ok, 300, lambda: 1.0)
    key = StringKey("anything")
    assert cache.get(key) == "ok"
    assert cache.exists(key) is False


def test_new_mock_cache():
    cache = new_mock_cache(retrieve_ok)
    key = StringKey("anything")
    assert cache.get_string(key) == "ok"
    assert cache.direct_get(key) == ("ok", True)