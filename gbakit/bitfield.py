"""Immutable integer values with named bit fields."""

from __future__ import annotations

import enum
from typing import Any, ClassVar, Dict, TypeVar

_B = TypeVar("_B", bound="Bitfield")


class _Field:
    """A named span of bits, ``low`` to ``high`` inclusive."""

    def __init__(self, low: int, high: int) -> None:
        if low < 0 or high < low:
            raise ValueError(f"invalid bit span {low}..={high}")
        self.low = low
        self.high = high
        self.name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    @property
    def mask(self) -> int:
        return ((1 << (self.high - self.low + 1)) - 1) << self.low

    def __get__(self, obj: Any, objtype: Any = None) -> Any:
        if obj is None:
            return self
        return self.decode(int(obj) & self.mask)

    def __set__(self, obj: Any, value: Any) -> None:
        raise AttributeError(
            f"{type(obj).__name__} is immutable; use replace({self.name}=...)"
        )

    def insert(self, bits: int, value: Any) -> int:
        """Return ``bits`` with this field set to ``value``."""
        return (bits & ~self.mask) | self.encode(value)

    def decode(self, raw: int) -> Any:
        raise NotImplementedError

    def encode(self, value: Any) -> int:
        raise NotImplementedError


class BoolField(_Field):
    """A single bit read and written as a ``bool``."""

    def __init__(self, bit: int) -> None:
        super().__init__(bit, bit)

    def decode(self, raw: int) -> bool:
        return raw != 0

    def encode(self, value: Any) -> int:
        return self.mask if value else 0


class IntField(_Field):
    """An unsigned integer stored in bits ``low`` to ``high`` inclusive."""

    @property
    def max_value(self) -> int:
        return (1 << (self.high - self.low + 1)) - 1

    def decode(self, raw: int) -> int:
        return raw >> self.low

    def encode(self, value: Any) -> int:
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"{self.name} must be an int, not {type(value).__name__}")
        if not 0 <= value <= self.max_value:
            raise ValueError(
                f"{self.name} must be in 0..={self.max_value}, got {value}"
            )
        return value << self.low


class EnumField(_Field):
    """An enum whose member values are already shifted into position."""

    def __init__(self, enum_type: type[enum.Enum], low: int, high: int) -> None:
        super().__init__(low, high)
        self.enum_type = enum_type

    def decode(self, raw: int) -> enum.Enum:
        return self.enum_type(raw)

    def encode(self, value: Any) -> int:
        if not isinstance(value, self.enum_type):
            raise TypeError(
                f"{self.name} must be a {self.enum_type.__name__}, "
                f"not {type(value).__name__}"
            )
        raw = value.value
        if raw & ~self.mask:
            raise ValueError(f"{value!r} does not fit in field {self.name}")
        return raw


class Bitfield:
    """An immutable unsigned integer of ``width`` bits with named fields.

    Subclasses declare fields as class attributes and may pass ``width`` as a
    class keyword. Instances are built from raw bits and/or field values and
    are changed with :meth:`replace`.
    """

    width: ClassVar[int] = 16
    _fields: ClassVar[Dict[str, _Field]] = {}

    def __init_subclass__(cls, width: int | None = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if width is not None:
            if width <= 0:
                raise ValueError("width must be positive")
            cls.width = width
        fields = dict(cls._fields)
        for name, value in vars(cls).items():
            if isinstance(value, _Field):
                fields[name] = value
        for field in fields.values():
            if field.high >= cls.width:
                raise ValueError(
                    f"field {field.name} does not fit in {cls.width} bits"
                )
        cls._fields = fields

    def __init__(self, bits: int = 0, **fields: Any) -> None:
        if not isinstance(bits, int) or isinstance(bits, bool):
            raise TypeError("bits must be an int")
        if not 0 <= bits < (1 << self.width):
            raise ValueError(f"bits must fit in {self.width} unsigned bits")
        for name, value in fields.items():
            field = self._fields.get(name)
            if field is None:
                raise TypeError(f"{type(self).__name__} has no field {name!r}")
            bits = field.insert(bits, value)
        object.__setattr__(self, "_bits", bits)

    @property
    def bits(self) -> int:
        """The raw integer value."""
        return self._bits

    def replace(self: _B, **kwargs: Any) -> _B:
        """Return a copy with the given fields changed."""
        return type(self)(self._bits, **kwargs)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __int__(self) -> int:
        return self._bits

    def __index__(self) -> int:
        return self._bits

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._bits == other._bits  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self._bits))

    def __repr__(self) -> str:
        parts = []
        for name in self._fields:
            try:
                parts.append(f"{name}={getattr(self, name)!r}")
            except ValueError:
                parts.append(f"{name}=<invalid>")
        return f"{type(self).__name__}({', '.join(parts)})"