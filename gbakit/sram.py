"""Battery-backed SRAM save media, held as plain bytes."""

from __future__ import annotations

from typing import Optional

from gbakit.save import (
    MediaInfo,
    MediaType,
    OutOfBoundsError,
    RawSaveAccess,
    set_save_implementation,
)

SRAM_SIZE = 32 * 1024

#: The marker emulators look for to recognise a ROM that uses SRAM.
SRAM_MARKER = b"SRAM_Vnnn\0\0\0"

_INFO = MediaInfo(
    media_type=MediaType.SRAM_32K,
    sector_shift=0,
    sector_count=SRAM_SIZE,
    requires_prepare_write=False,
)


def _check_bounds(offset: int, length: int) -> None:
    if offset < 0 or length < 0 or offset + length > SRAM_SIZE:
        raise OutOfBoundsError(
            f"range {offset}..{offset + length} is outside 0..{SRAM_SIZE}"
        )


class BatteryBackedAccess(RawSaveAccess):
    """32 KiB SRAM, read and written like ordinary memory."""

    def __init__(self, contents: Optional[bytes] = None) -> None:
        if contents is None:
            self._memory = bytearray(SRAM_SIZE)
        else:
            if len(contents) != SRAM_SIZE:
                raise ValueError(f"SRAM contents must be {SRAM_SIZE} bytes")
            self._memory = bytearray(contents)

    def info(self) -> MediaInfo:
        """Return the SRAM media info."""
        return _INFO

    def read(self, offset: int, length: int) -> bytes:
        """Return ``length`` bytes starting at ``offset``."""
        _check_bounds(offset, length)
        return bytes(self._memory[offset : offset + length])

    def verify(self, offset: int, data: bytes) -> bool:
        """Return whether the memory at ``offset`` holds ``data``."""
        _check_bounds(offset, len(data))
        return self._memory[offset : offset + len(data)] == bytes(data)

    def prepare_write(self, sector: int, count: int) -> None:
        """SRAM needs no erase; only reject sector spans that cannot exist."""
        if sector < 0 or count < 0:
            raise OutOfBoundsError(
                f"sector span {sector}+{count} must not be negative"
            )

    def write(self, offset: int, data: bytes) -> None:
        """Write ``data`` at ``offset``."""
        _check_bounds(offset, len(data))
        self._memory[offset : offset + len(data)] = data


def use_sram(access: Optional[BatteryBackedAccess] = None) -> BatteryBackedAccess:
    """Declare that SRAM is the save media and install ``access`` for it.

    A fresh, zero-filled :class:`BatteryBackedAccess` is made when none is
    given. Returns the installed accessor.
    """
    if access is None:
        access = BatteryBackedAccess()
    set_save_implementation(access)
    return access