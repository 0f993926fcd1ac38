import threading

import pytest

from gbakit.sync import (
    AlreadyLockedError,
    InitOnce,
    Mutex,
    MutexGuard,
    RawMutex,
    RawMutexGuard,
    Static,
)


def test_static_read_write():
    s = Static(5)
    assert s.read() == 5
    s.write(9)
    assert s.read() == 9


def test_static_replace_returns_old():
    s = Static("a")
    assert s.replace("b") == "a"
    assert s.replace("c") == "b"
    assert s.read() == "c"


def test_raw_mutex_try_lock_twice():
    m = RawMutex()
    guard = m.try_lock()
    assert isinstance(guard, RawMutexGuard)
    assert m.try_lock() is None
    guard.release()
    assert m.locked is False


def test_raw_mutex_lock_raises_when_held():
    m = RawMutex()
    guard = m.lock()
    with pytest.raises(AlreadyLockedError) as info:
        m.lock()
    assert "already been locked" in str(info.value)
    guard.release()
    second = m.lock()
    assert m.locked is True
    second.release()


def test_raw_mutex_context_manager_releases():
    m = RawMutex()
    with m.lock() as guard:
        assert m.locked is True
        assert guard.released is False
    assert m.locked is False
    assert guard.released is True


def test_raw_mutex_context_releases_on_error():
    m = RawMutex()
    with pytest.raises(KeyError):
        with m.lock():
            raise KeyError("x")
    assert m.try_lock() is not None and m.locked


def test_raw_guard_double_release_raises():
    m = RawMutex()
    guard = m.lock()
    guard.release()
    with pytest.raises(RuntimeError):
        guard.release()
    assert m.locked is False


def test_mutex_value_persists():
    m = Mutex([1, 2])
    with m.lock() as guard:
        assert guard.value == [1, 2]
        guard.value = [3]
    with m.lock() as guard:
        assert guard.value == [3]


def test_mutex_try_lock_when_held():
    m = Mutex(0)
    guard = m.try_lock()
    assert isinstance(guard, MutexGuard)
    assert m.try_lock() is None
    with pytest.raises(AlreadyLockedError):
        m.lock()
    guard.release()
    assert m.locked is False


def test_mutex_guard_unusable_after_release():
    m = Mutex(1)
    guard = m.lock()
    guard.release()
    with pytest.raises(RuntimeError):
        _ = guard.value
    with pytest.raises(RuntimeError):
        guard.release()


def test_init_once_calls_initializer_once():
    calls = []

    def init():
        calls.append(1)
        return "value"

    once = InitOnce()
    assert once.is_initialized is False
    assert once.get(init) == "value"
    assert once.get(init) == "value"
    assert once.try_get(init) == "value"
    assert len(calls) == 1
    assert once.is_initialized is True


def test_init_once_retries_after_failure():
    once = InitOnce()

    def fail():
        raise ValueError("nope")

    with pytest.raises(ValueError):
        once.try_get(fail)
    assert once.is_initialized is False
    assert once.try_get(lambda: 42) == 42
    assert once.try_get(fail) == 42


def test_init_once_threads_share_one_value():
    once = InitOnce()
    calls = []
    created = []
    results = []

    def init():
        calls.append(1)
        value = object()
        created.append(value)
        return value

    def worker():
        results.append(once.get(init))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(calls) == 1
    assert len(results) == 8
    assert once.get(init) is created[0]
    assert once.try_get(init) is created[0]
    assert all(r is created[0] for r in results)
    assert len(calls) == 1