"""Shared state that is safe to touch from both normal code and handlers.

The locks here never block: taking a lock that is already held either fails
(``try_lock`` returns ``None``) or raises :class:`AlreadyLockedError`.
"""

from __future__ import annotations

import threading
from typing import Callable, Generic, Optional, TypeVar

_T = TypeVar("_T")


class AlreadyLockedError(RuntimeError):
    """Raised when a lock is taken while it is already held."""

    def __init__(self) -> None:
        super().__init__("This lock has already been locked by another thread.")


class Static(Generic[_T]):
    """A variable whose reads, writes and swaps are never observed half-done."""

    __slots__ = ("_value", "_guard")

    def __init__(self, val: _T) -> None:
        self._value = val
        self._guard = threading.Lock()

    def read(self) -> _T:
        """Return the current value."""
        with self._guard:
            return self._value

    def write(self, val: _T) -> None:
        """Store a new value."""
        with self._guard:
            self._value = val

    def replace(self, val: _T) -> _T:
        """Store a new value and return the one it replaced."""
        with self._guard:
            old = self._value
            self._value = val
            return old

    def __repr__(self) -> str:
        return f"Static({self.read()!r})"


class RawMutex:
    """A non-blocking lock that protects no data of its own."""

    __slots__ = ("_locked",)

    def __init__(self) -> None:
        self._locked: Static[bool] = Static(False)

    @property
    def locked(self) -> bool:
        """Whether a guard is currently held."""
        return self._locked.read()

    def _raw_lock(self) -> bool:
        return not self._locked.replace(True)

    def _raw_unlock(self) -> None:
        if not self._locked.replace(False):
            raise RuntimeError("attempt to unlock a RawMutex which is not locked")

    def lock(self) -> "RawMutexGuard":
        """Return a guard, or raise :class:`AlreadyLockedError` if held."""
        guard = self.try_lock()
        if guard is None:
            raise AlreadyLockedError()
        return guard

    def try_lock(self) -> Optional["RawMutexGuard"]:
        """Return a guard, or ``None`` if the lock is already held."""
        if self._raw_lock():
            return RawMutexGuard(self)
        return None


class RawMutexGuard:
    """An active hold on a :class:`RawMutex`; release it or use ``with``."""

    __slots__ = ("_mutex", "_released")

    def __init__(self, mutex: RawMutex) -> None:
        self._mutex = mutex
        self._released = False

    @property
    def released(self) -> bool:
        """Whether this guard has given up its lock."""
        return self._released

    def release(self) -> None:
        """Give up the lock; a guard may be released only once."""
        if self._released:
            raise RuntimeError("guard has already been released")
        self._released = True
        self._mutex._raw_unlock()

    def __enter__(self) -> "RawMutexGuard":
        return self

    def __exit__(self, *exc_info: object) -> None:
        if not self._released:
            self.release()


class Mutex(Generic[_T]):
    """A non-blocking lock around a value."""

    __slots__ = ("_raw", "_value")

    def __init__(self, value: _T) -> None:
        self._raw = RawMutex()
        self._value = value

    @property
    def locked(self) -> bool:
        """Whether a guard is currently held."""
        return self._raw.locked

    def lock(self) -> "MutexGuard[_T]":
        """Return a guard, or raise :class:`AlreadyLockedError` if held."""
        guard = self.try_lock()
        if guard is None:
            raise AlreadyLockedError()
        return guard

    def try_lock(self) -> Optional["MutexGuard[_T]"]:
        """Return a guard, or ``None`` if the lock is already held."""
        if self._raw._raw_lock():
            return MutexGuard(self)
        return None


class MutexGuard(Generic[_T]):
    """Access to the value of a held :class:`Mutex`."""

    __slots__ = ("_mutex", "_released")

    def __init__(self, mutex: Mutex[_T]) -> None:
        self._mutex = mutex
        self._released = False

    def _check(self) -> None:
        if self._released:
            raise RuntimeError("guard has already been released")

    @property
    def value(self) -> _T:
        """The protected value."""
        self._check()
        return self._mutex._value

    @value.setter
    def value(self, new: _T) -> None:
        self._check()
        self._mutex._value = new

    @property
    def released(self) -> bool:
        """Whether this guard has given up its lock."""
        return self._released

    def release(self) -> None:
        """Give up the lock; a guard may be released only once."""
        self._check()
        self._released = True
        self._mutex._raw._raw_unlock()

    def __enter__(self) -> "MutexGuard[_T]":
        return self

    def __exit__(self, *exc_info: object) -> None:
        if not self._released:
            self.release()


class InitOnce(Generic[_T]):
    """A value computed on first use and kept from then on."""

    __slots__ = ("_initialized", "_value", "_init_lock")

    def __init__(self) -> None:
        self._initialized = False
        self._value: Optional[_T] = None
        self._init_lock = threading.Lock()

    @property
    def is_initialized(self) -> bool:
        """Whether a value has been stored."""
        return self._initialized

    def get(self, initializer: Callable[[], _T]) -> _T:
        """Return the value, calling ``initializer`` only the first time."""
        return self.try_get(initializer)

    def try_get(self, initializer: Callable[[], _T]) -> _T:
        """Return the value, initializing it if needed.

        If ``initializer`` raises, nothing is stored and the exception
        propagates; a later call tries again.
        """
        if not self._initialized:
            with self._init_lock:
                if not self._initialized:
                    self._value = initializer()
                    self._initialized = True
        return self._value  # type: ignore[return-value]