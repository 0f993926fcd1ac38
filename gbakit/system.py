"""DMA, interrupt, keypad, reset and timer register values."""

from __future__ import annotations

import enum

from gbakit.bitfield import Bitfield, BoolField, EnumField, IntField

_KEY_MASK = 0b11_1111_1111


class DestAddrControl(enum.Enum):
    """DMA destination address stepping, pre-shifted into bits 5..=6."""

    INCREMENT = 0 << 5
    DECREMENT = 1 << 5
    FIXED = 2 << 5
    INCREMENT_RELOAD = 3 << 5


class SrcAddrControl(enum.Enum):
    """DMA source address stepping, pre-shifted into bits 7..=8."""

    INCREMENT = 0 << 7
    DECREMENT = 1 << 7
    FIXED = 2 << 7
    PROHIBITED = 3 << 7


class DmaStartTiming(enum.Enum):
    """When a DMA transfer starts, pre-shifted into bits 12..=13."""

    IMMEDIATELY = 0 << 12
    VBLANK = 1 << 12
    HBLANK = 2 << 12
    SPECIAL = 3 << 12


class DmaControl(Bitfield, width=16):
    """DMA channel control register."""

    dest_addr = EnumField(DestAddrControl, 5, 6)
    src_addr = EnumField(SrcAddrControl, 7, 8)
    dma_repeat = BoolField(9)
    transfer_u32 = BoolField(10)
    drq_from_game_pak = BoolField(11)
    start_time = EnumField(DmaStartTiming, 12, 13)
    irq_when_done = BoolField(14)
    enabled = BoolField(15)


class InterruptFlags(Bitfield, width=16):
    """Set of interrupt sources, combinable with bitwise operators."""

    vblank = BoolField(0)
    hblank = BoolField(1)
    vcount = BoolField(2)
    timer0 = BoolField(3)
    timer1 = BoolField(4)
    timer2 = BoolField(5)
    timer3 = BoolField(6)
    serial = BoolField(7)
    dma0 = BoolField(8)
    dma1 = BoolField(9)
    dma2 = BoolField(10)
    dma3 = BoolField(11)
    keypad = BoolField(12)
    gamepak = BoolField(13)

    def __and__(self, other: object) -> "InterruptFlags":
        if type(other) is not type(self):
            return NotImplemented
        return type(self)(self.bits & other.bits)  # type: ignore[attr-defined]

    def __or__(self, other: object) -> "InterruptFlags":
        if type(other) is not type(self):
            return NotImplemented
        return type(self)(self.bits | other.bits)  # type: ignore[attr-defined]

    def __xor__(self, other: object) -> "InterruptFlags":
        if type(other) is not type(self):
            return NotImplemented
        return type(self)(self.bits ^ other.bits)  # type: ignore[attr-defined]

    def __invert__(self) -> "InterruptFlags":
        return type(self)(~self.bits & ((1 << self.width) - 1))

    def __repr__(self) -> str:
        names = "".join(f"{name}," for name in self._fields if getattr(self, name))
        return f"InterruptFlags {{{names}}}"


class KeyInterruptControl(Bitfield, width=16):
    """Keypad interrupt control register."""

    a = BoolField(0)
    b = BoolField(1)
    select = BoolField(2)
    start = BoolField(3)
    right = BoolField(4)
    left = BoolField(5)
    up = BoolField(6)
    down = BoolField(7)
    r = BoolField(8)
    l = BoolField(9)  # noqa: E741
    enabled = BoolField(14)
    require_all = BoolField(15)


class KeysLowActive(Bitfield, width=16):
    """Keypad state as the hardware reports it: a set bit means released."""

    a_released = BoolField(0)
    b_released = BoolField(1)
    select_released = BoolField(2)
    start_released = BoolField(3)
    right_released = BoolField(4)
    left_released = BoolField(5)
    up_released = BoolField(6)
    down_released = BoolField(7)
    r_released = BoolField(8)
    l_released = BoolField(9)


class Keys(Bitfield, width=16):
    """Keypad state where a set bit means pressed."""

    a = BoolField(0)
    b = BoolField(1)
    select = BoolField(2)
    start = BoolField(3)
    right = BoolField(4)
    left = BoolField(5)
    up = BoolField(6)
    down = BoolField(7)
    r = BoolField(8)
    l = BoolField(9)  # noqa: E741

    def x_signum(self) -> int:
        """1 for right, -1 for left, 0 for neither; right wins."""
        if self.right:
            return 1
        if self.left:
            return -1
        return 0

    def y_signum(self) -> int:
        """1 for down, -1 for up, 0 for neither; down wins."""
        if self.down:
            return 1
        if self.up:
            return -1
        return 0

    @classmethod
    def from_low_active(cls, low_active: KeysLowActive) -> "Keys":
        """Convert a low-active reading into pressed-key form."""
        return cls(low_active.bits ^ _KEY_MASK)

    def to_low_active(self) -> KeysLowActive:
        """Convert into the hardware's low-active form."""
        return KeysLowActive(self.bits ^ _KEY_MASK)


class ResetFlags(Bitfield, width=8):
    """Memory and register areas to clear on a reset."""

    palram = BoolField(2)
    vram = BoolField(3)
    oam = BoolField(4)
    sio = BoolField(5)
    sound = BoolField(6)
    all_other_io = BoolField(7)


class TimerControl(Bitfield, width=8):
    """Timer control register."""

    prescaler_selection = IntField(0, 1)
    chained_counting = BoolField(2)
    irq_on_overflow = BoolField(6)
    enabled = BoolField(7)