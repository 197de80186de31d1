"""128-bit packed encodings of the fixed-point formats.

Packing only narrows the backing integer for compact persistence; it never
changes precision. `FixedPoint.pack()` performs the range check, `unpack()` is a
plain widening and cannot fail. The link back to the wide format is bound in
`fixed.py` once both sides exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, ClassVar

from .errors import PackingOverflowError, PackingUnderflowError

PACKED_BITS = 128


@dataclass(frozen=True)
class PackedFixedPoint:
    """Raw scaled integer held in a 128-bit (signed or unsigned) slot."""

    value: int

    SIGNED: ClassVar[bool]
    MIN_RAW: ClassVar[int]
    MAX_RAW: ClassVar[int]
    UNPACKED: ClassVar[Any]

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise TypeError(f"{type(self).__name__} value must be an int")
        if self.value > self.MAX_RAW:
            raise PackingOverflowError(type(self).__name__, self.value)
        if self.value < self.MIN_RAW:
            raise PackingUnderflowError(type(self).__name__, self.value)

    def unpack(self) -> Any:
        return self.UNPACKED(self.value)


def _packed(signed: bool) -> Callable[[type], type]:
    def wrap(cls: type) -> type:
        cls.SIGNED = signed
        if signed:
            cls.MIN_RAW = -(1 << (PACKED_BITS - 1))
            cls.MAX_RAW = (1 << (PACKED_BITS - 1)) - 1
        else:
            cls.MIN_RAW = 0
            cls.MAX_RAW = (1 << PACKED_BITS) - 1
        cls.MAX = cls(cls.MAX_RAW)
        cls.MIN = cls(cls.MIN_RAW)
        return cls

    return wrap


@_packed(signed=True)
class PackedFixed6(PackedFixedPoint):
    pass


@_packed(signed=False)
class PackedUFixed6(PackedFixedPoint):
    pass


@_packed(signed=True)
class PackedFixed18(PackedFixedPoint):
    pass


@_packed(signed=False)
class PackedUFixed18(PackedFixedPoint):
    pass
