"""Pseudo-random number generation with a 32-bit permuted congruential generator."""

from __future__ import annotations

import abc
from dataclasses import dataclass, field
from typing import Any, MutableSequence, Optional, Sequence, Tuple, TypeVar

from gbakit.video import Color

_T = TypeVar("_T")

_U16 = 0xFFFF
_U32 = 0xFFFF_FFFF

#: A default seed for any PCG; truncate to fit.
DEFAULT_PCG_SEED = 201526561274146932589719779721328219291
#: A default ``inc`` for any PCG; truncate to fit.
DEFAULT_PCG_INC = 34172814569070222299

PCG_MULTIPLIER_32 = 0xF13283AD


def _check_u32(name: str, value: int) -> int:
    if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= _U32:
        raise ValueError(f"{name} must be an unsigned 32-bit integer, got {value!r}")
    return value


def jump_lcg32(delta: int, state: int, mult: int, inc: int) -> int:
    """Return the 32-bit LCG state ``delta`` steps ahead, in ``log(delta)`` time."""
    _check_u32("delta", delta)
    cur_mult = mult & _U32
    cur_plus = inc & _U32
    acc_mult = 1
    acc_plus = 0
    while delta > 0:
        if delta & 1:
            acc_mult = (acc_mult * cur_mult) & _U32
            acc_plus = (acc_plus * cur_mult + cur_plus) & _U32
        cur_plus = ((cur_mult + 1) * cur_plus) & _U32
        cur_mult = (cur_mult * cur_mult) & _U32
        delta >>= 1
    return (acc_mult * (state & _U32) + acc_plus) & _U32


def _advance(state: int, inc: int) -> int:
    return (state * PCG_MULTIPLIER_32 + inc) & _U32


class Gen32(abc.ABC):
    """A generator with 32 bits of output per step."""

    @abc.abstractmethod
    def next_u32(self) -> int:
        """Generate the next 32 bits of output."""

    @abc.abstractmethod
    def next_u16(self) -> int:
        """Generate the next 16 bits of output."""

    def next_color(self) -> Color:
        """Produce a random 15-bit color."""
        return Color(self.next_u16() & 0x7FFF)

    def next_bool(self) -> bool:
        """Produce a bool from the top bit of a 32-bit output."""
        return bool(self.next_u32() & 0x8000_0000)

    def next_u8(self) -> int:
        """Produce an 8-bit value from the high byte of a 16-bit output."""
        return (self.next_u16() >> 8) & 0xFF

    def next_u64(self) -> int:
        """Produce a 64-bit value; the first output is the low half."""
        low = self.next_u32()
        high = self.next_u32()
        return (high << 32) | low

    def next_bounded(self, b: int) -> int:
        """Return a value in ``0 .. b``; ``b`` must be in ``1 ..= 0xFFFF``."""
        if not isinstance(b, int) or b == 0:
            raise ValueError("bound must be non-zero")
        if not 0 < b <= _U16:
            raise ValueError(f"bound must fit in 16 bits, got {b}")
        mul = b * self.next_u16()
        low = mul & _U16
        if low < b:
            threshold = (0x10000 - b) % b
            while low < threshold:
                mul = (b * self.next_u32()) & _U32
                low = mul & _U16
        return (mul >> 16) & _U16

    def pick(self, buf: Sequence[_T]) -> _T:
        """Return a random element, never past index ``0xFFFF``."""
        end = min(len(buf), _U16)
        return buf[self.next_bounded(end)]

    def shuffle(self, buf: MutableSequence[Any]) -> None:
        """Shuffle ``buf`` in place, moving forward from the start.

        Only the first ``0xFFFF`` positions receive a random element.
        """
        if not buf:
            raise ValueError("cannot shuffle an empty sequence")
        possibilities = min(len(buf), _U16)
        for index in range(min(len(buf) - 1, _U16)):
            offset = self.next_bounded(possibilities - index)
            other = index + offset
            buf[index], buf[other] = buf[other], buf[index]


@dataclass(frozen=True)
class BoundedRandU16:
    """Precomputed values to sample a number in ``0 .. count``."""

    count: int
    threshold: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        count = self.count
        if not isinstance(count, int) or isinstance(count, bool):
            raise TypeError("count must be an int")
        if count == 0:
            raise ValueError("count must be non-zero")
        if not 0 < count <= _U16:
            raise ValueError(f"count must fit in 16 bits, got {count}")
        object.__setattr__(self, "threshold", (0x10000 - count) % count)

    @classmethod
    def try_new(cls, count: int) -> Optional["BoundedRandU16"]:
        """Build one, or return ``None`` if ``count`` is zero."""
        return cls(count) if count > 0 else None

    def place_in_range(self, val: int) -> Optional[int]:
        """Map a 16-bit value into range, or ``None`` if it must be rejected."""
        mul = (val & _U16) * self.count
        if (mul & _U16) < self.threshold:
            return None
        return (mul >> 16) & _U16

    def sample(self, gen: Gen32) -> int:
        """Draw from ``gen`` until a value lands in range."""
        while True:
            output = self.place_in_range(gen.next_u16())
            if output is not None:
                return output


@dataclass
class RNG(Gen32):
    """A permuted congruential generator with 32 bits of state."""

    state: int
    inc: int

    @classmethod
    def seed(cls, seed: int, inc: int) -> "RNG":
        """Seed a new generator, mixing the inputs so that simple seeds work."""
        _check_u32("seed", seed)
        _check_u32("inc", inc)
        inc = ((inc << 1) | 1) & _U32
        state = _advance(0, inc)
        state = (state + seed) & _U32
        state = _advance(state, inc)
        return cls(state, inc)

    @classmethod
    def default(cls) -> "RNG":
        """A generator seeded with the truncated default constants."""
        return cls.seed(DEFAULT_PCG_SEED & _U32, DEFAULT_PCG_INC & _U32)

    @classmethod
    def from_state(cls, state: Tuple[int, int]) -> "RNG":
        """Restore a generator exactly from a ``(state, inc)`` pair."""
        raw_state, inc = state
        return cls(_check_u32("state", raw_state), _check_u32("inc", inc))

    def to_state(self) -> Tuple[int, int]:
        """Return the exact ``(state, inc)`` pair."""
        return (self.state, self.inc)

    def next_u32(self) -> int:
        """Return the next 32 bits of output."""
        state = self.state
        state ^= ((state >> (4 + (state >> 28))) * 277803737) & _U32
        out = state ^ (state >> 22)
        self.state = _advance(state, self.inc)
        return out

    def next_u16(self) -> int:
        """Return the next 16 bits of output."""
        state = self.state
        out = ((state ^ (state >> 6)) >> (6 + (state >> 29))) & _U16
        self.state = _advance(state, self.inc)
        return out

    def jump(self, delta: int) -> None:
        """Advance the state by ``delta`` steps; ``0xFFFFFFFF`` steps back one."""
        self.state = jump_lcg32(delta, self.state, PCG_MULTIPLIER_32, self.inc)