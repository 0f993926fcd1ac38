"""Reading and writing save media through one shared interface.

A save media implementation (a :class:`RawSaveAccess`) is installed with
:func:`set_save_implementation`; :class:`SaveAccess` then reads, verifies,
prepares and writes it by byte offset. Writes to media that need it must be
preceded by :meth:`SaveAccess.prepare_write` over the range to be written,
which acts on whole sectors.
"""

from __future__ import annotations

import abc
import enum
from dataclasses import dataclass
from typing import Optional

from gbakit.sync import RawMutex, RawMutexGuard, Static


class MediaType(enum.IntEnum):
    """The kinds of save media."""

    SRAM_32K = enum.auto()
    EEPROM_8K = enum.auto()
    EEPROM_512B = enum.auto()
    FLASH_64K = enum.auto()
    FLASH_128K = enum.auto()
    CUSTOM = enum.auto()


class SaveError(Exception):
    """Base class for errors while reading or writing save media."""


class NoMediaError(SaveError):
    """There is no save media attached."""


class WriteError(SaveError):
    """The data could not be written to save media."""


class OperationTimedOutError(SaveError):
    """An operation on save media timed out."""


class OutOfBoundsError(SaveError):
    """Save media was accessed at an invalid offset."""


class MediaInUseError(SaveError):
    """The media is already in use by another operation."""


class IncompatibleCommandError(SaveError):
    """The command cannot be used with the save media in use."""


@dataclass(frozen=True)
class MediaInfo:
    """Information about a kind of save media.

    ``sector_shift`` is the power-of-two sector size; zero means sectors of a
    single byte, that is, no sectors in use.
    """

    media_type: MediaType
    sector_shift: int
    sector_count: int
    requires_prepare_write: bool


class RawSaveAccess(abc.ABC):
    """Low-level access to one kind of save media.

    Memory is read as a continuous block of bytes and prepared for writing as
    an array of sectors.
    """

    @abc.abstractmethod
    def info(self) -> MediaInfo:
        """Return information about the save media."""

    @abc.abstractmethod
    def read(self, offset: int, length: int) -> bytes:
        """Return exactly ``length`` bytes starting at ``offset``."""

    @abc.abstractmethod
    def verify(self, offset: int, data: bytes) -> bool:
        """Return whether the media at ``offset`` holds ``data``."""

    @abc.abstractmethod
    def prepare_write(self, sector: int, count: int) -> None:
        """Prepare ``count`` sectors from ``sector`` for writing.

        This may erase their current contents.
        """

    @abc.abstractmethod
    def write(self, offset: int, data: bytes) -> None:
        """Write ``data`` at ``offset``; the sectors must be prepared first."""


_CURRENT_SAVE_ACCESS: Static[Optional[RawSaveAccess]] = Static(None)
_MEDIA_LOCK = RawMutex()


def set_save_implementation(access: Optional[RawSaveAccess]) -> None:
    """Install the save media implementation in use, or ``None`` for none."""
    if access is not None and not isinstance(access, RawSaveAccess):
        raise TypeError("access must be a RawSaveAccess or None")
    _CURRENT_SAVE_ACCESS.write(access)


def get_save_implementation() -> Optional[RawSaveAccess]:
    """Return the installed save media implementation, if any."""
    return _CURRENT_SAVE_ACCESS.read()


def lock_media() -> RawMutexGuard:
    """Take the global save media lock.

    Raises :class:`MediaInUseError` if it is already held. The returned guard
    releases the lock when used as a context manager or released explicitly.
    """
    guard = _MEDIA_LOCK.try_lock()
    if guard is None:
        raise MediaInUseError("save media is already in use")
    return guard


class SaveAccess:
    """Reads and writes the installed save media by byte offset."""

    __slots__ = ("_access", "_info")

    def __init__(self, access: Optional[RawSaveAccess] = None) -> None:
        if access is None:
            access = get_save_implementation()
        if access is None:
            raise NoMediaError("no save media implementation is set")
        self._access = access
        self._info = access.info()

    def media_info(self) -> MediaInfo:
        """Return the media info of the underlying media."""
        return self._info

    def media_type(self) -> MediaType:
        """Return the kind of save media in use."""
        return self._info.media_type

    def sector_size(self) -> int:
        """Return the sector size; writes aligned to it are most efficient."""
        return 1 << self._info.sector_shift

    def __len__(self) -> int:
        return self._info.sector_count << self._info.sector_shift

    def read(self, offset: int, length: int) -> bytes:
        """Return ``length`` bytes of save media starting at ``offset``."""
        return self._access.read(offset, length)

    def verify(self, offset: int, data: bytes) -> bool:
        """Return whether the save media at ``offset`` matches ``data``."""
        return self._access.verify(offset, data)

    def requires_prepare_write(self) -> bool:
        """Return whether writes must be preceded by :meth:`prepare_write`."""
        return self._info.requires_prepare_write

    def align_range(self, start: int, end: int) -> range:
        """Return the range of every sector that ``start..end`` overlaps."""
        mask = (1 << self._info.sector_shift) - 1
        return range(start & ~mask, (end + mask) & ~mask)

    def prepare_write(self, start: int, end: int) -> None:
        """Prepare the offsets ``start..end`` for writing.

        Any data in a sector overlapping the range may be erased; see
        :meth:`align_range`. Does nothing on media that do not need it.
        """
        if not self._info.requires_prepare_write:
            return
        aligned = self.align_range(start, end)
        shift = self._info.sector_shift
        self._access.prepare_write(aligned.start >> shift, len(aligned) >> shift)

    def write(self, offset: int, data: bytes) -> None:
        """Write ``data`` into the save media at ``offset``."""
        self._access.write(offset, data)

    def write_and_verify(self, offset: int, data: bytes) -> None:
        """Write ``data`` and raise :class:`WriteError` if it did not stick."""
        self.write(offset, data)
        if not self.verify(offset, data):
            raise WriteError("save media contents do not match what was written")