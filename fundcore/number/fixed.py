"""Fixed-point decimal values backed by 256-bit scaled integers.

One generic implementation, `FixedPoint`, carries all arithmetic. The four
concrete formats only differ in their parameters:

    format    decimals  signed  raw range
    Fixed6    6         yes     [-2**255, 2**255 - 1]
    UFixed6   6         no      [0, 2**256 - 1]
    Fixed18   18        yes     [-2**255, 2**255 - 1]
    UFixed18  18        no      [0, 2**256 - 1]

Rounding contract: every operation that can leave a fractional remainder has a
default form that rounds toward zero and an ``*_out`` form that rounds away
from zero. Intermediate products are exact Python ints; only the final result
is range-checked, so ``muldiv`` never loses precision to an intermediate step.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Type, TypeVar, Union

from ..state.storage import Key, Storage, from_word, to_word
from .errors import (
    FixedOverflowError,
    FixedUnderflowError,
    PackingOverflowError,
    PackingUnderflowError,
)
from .math import abs_val, div_out, div_trunc, sign
from .packed import (
    PackedFixed6,
    PackedFixed18,
    PackedFixedPoint,
    PackedUFixed6,
    PackedUFixed18,
)

F = TypeVar("F", bound="FixedPoint")

BACKING_BITS = 256

_DECIMAL_RE = re.compile(r"^([+-]?)([0-9]+)(?:\.([0-9]+))?$")


def _require_int(name: str, x: Any) -> int:
    if not isinstance(x, int) or isinstance(x, bool):
        raise TypeError(f"{name} must be an int")
    return x


@dataclass(frozen=True)
class FixedPoint:
    """A decimal value stored as ``value / 10**DECIMALS``.

    Not instantiated directly; use one of the concrete formats.
    """

    value: int

    DECIMALS: ClassVar[int]
    SIGNED: ClassVar[bool]
    BASE: ClassVar[int]
    MIN_RAW: ClassVar[int]
    MAX_RAW: ClassVar[int]

    ZERO: ClassVar[Any]
    ONE: ClassVar[Any]
    MAX: ClassVar[Any]

    # Same-precision counterpart of the other signedness, and the packed encoding.
    SIGNED_TYPE: ClassVar[Any]
    UNSIGNED_TYPE: ClassVar[Any]
    PACKED: ClassVar[Any]

    def __post_init__(self) -> None:
        cls = type(self)
        v = _require_int(f"{cls.__name__} value", self.value)
        if v > cls.MAX_RAW:
            raise FixedOverflowError(cls.__name__, v)
        if v < cls.MIN_RAW:
            if cls.SIGNED:
                raise FixedOverflowError(cls.__name__, v)
            raise FixedUnderflowError(cls.__name__, v)

    # -- Construction -------------------------------------------------------

    @classmethod
    def from_int(cls: Type[F], n: int) -> F:
        """The whole number `n`."""
        return cls(_require_int("n", n) * cls.BASE)

    @classmethod
    def from_sign(cls: Type[F], s: int, m: FixedPoint) -> F:
        """``s * m`` for a sign ``s`` in {-1, 0, 1} and an unsigned magnitude ``m``."""
        cls._require_signed("from_sign")
        if s not in (-1, 0, 1) or isinstance(s, bool):
            raise ValueError(f"sign must be -1, 0 or 1, got {s!r}")
        if type(m) is not cls.UNSIGNED_TYPE:
            raise TypeError(f"expected {cls.UNSIGNED_TYPE.__name__}, got {type(m).__name__}")
        return cls(s * m.value)

    @classmethod
    def from_unsigned(cls: Type[F], m: FixedPoint) -> F:
        """Reinterpret an unsigned value of the same precision as signed."""
        return cls.from_sign(1, m)

    @classmethod
    def from_signed(cls: Type[F], f: FixedPoint) -> F:
        """Reinterpret a signed value of the same precision; negative input underflows."""
        if cls.SIGNED:
            raise TypeError(f"{cls.__name__}.from_signed requires an unsigned format")
        if type(f) is not cls.SIGNED_TYPE:
            raise TypeError(f"expected {cls.SIGNED_TYPE.__name__}, got {type(f).__name__}")
        return cls(f.value)

    @classmethod
    def convert(cls: Type[F], other: FixedPoint, round_out: bool = False) -> F:
        """Change precision between formats of the same signedness.

        Widening is exact. Narrowing drops digits, rounding toward zero unless
        `round_out` asks for away-from-zero.
        """
        if not isinstance(other, FixedPoint) or other.SIGNED != cls.SIGNED:
            raise TypeError(f"cannot convert {type(other).__name__} to {cls.__name__}")
        shift = cls.DECIMALS - other.DECIMALS
        if shift >= 0:
            return cls(other.value * 10**shift)
        d = 10 ** (-shift)
        return cls(div_out(other.value, d) if round_out else div_trunc(other.value, d))

    @classmethod
    def parse(cls: Type[F], text: Union[str, int]) -> F:
        """Exact value of a decimal literal such as ``"-12.5"``.

        Floats are rejected: their binary representation is not exact.
        """
        if isinstance(text, bool) or isinstance(text, float):
            raise TypeError(f"{cls.__name__}.parse does not accept {type(text).__name__}")
        if isinstance(text, int):
            return cls.from_int(text)
        if not isinstance(text, str):
            raise TypeError(f"{cls.__name__}.parse expects str or int")
        m = _DECIMAL_RE.match(text.strip())
        if m is None:
            raise ValueError(f"not a decimal literal: {text!r}")
        neg, whole, frac = m.group(1) == "-", m.group(2), m.group(3) or ""
        if len(frac) > cls.DECIMALS:
            raise ValueError(f"{text!r} has more than {cls.DECIMALS} fractional digits")
        raw = int(whole) * cls.BASE + (int(frac.ljust(cls.DECIMALS, "0")) if frac else 0)
        return cls(-raw if neg else raw)

    @classmethod
    def ratio(cls: Type[F], a: int, b: int) -> F:
        """Integer ratio ``a / b``, rounding toward zero."""
        return cls(div_trunc(_require_int("a", a) * cls.BASE, _require_int("b", b)))

    @classmethod
    def read(cls: Type[F], storage: Storage, key: Key) -> F:
        """Load a value previously written with `store`."""
        return cls(from_word(storage.read(key), cls.SIGNED))

    # -- Internal helpers ---------------------------------------------------

    @classmethod
    def _require_signed(cls, op: str) -> None:
        if not cls.SIGNED:
            raise TypeError(f"{cls.__name__}.{op} requires a signed format")

    def _same(self, other: Any) -> int:
        if type(other) is not type(self):
            raise TypeError(f"expected {type(self).__name__}, got {type(other).__name__}")
        return other.value

    def _operand(self, x: Any) -> int:
        if isinstance(x, FixedPoint):
            return self._same(x)
        return _require_int("operand", x)

    def _new(self: F, raw: int) -> F:
        return type(self)(raw)

    def _saturate(self: F) -> F:
        if self.value == 0:
            return self.ONE
        return self.MAX if self.value > 0 else type(self).MIN

    # -- Arithmetic ---------------------------------------------------------

    def add(self: F, other: F) -> F:
        return self._new(self.value + self._same(other))

    def sub(self: F, other: F) -> F:
        return self._new(self.value - self._same(other))

    def mul(self: F, other: F) -> F:
        """Product, rounding toward zero."""
        return self._new(div_trunc(self.value * self._same(other), self.BASE))

    def mul_out(self: F, other: F) -> F:
        """Product, rounding away from zero."""
        return self._new(div_out(self.value * self._same(other), self.BASE))

    def div(self: F, other: F) -> F:
        """Quotient, rounding toward zero. A zero divisor raises ``ZeroDivisionError``."""
        return self._new(div_trunc(self.value * self.BASE, self._same(other)))

    def div_out(self: F, other: F) -> F:
        """Quotient, rounding away from zero. A zero divisor raises ``DivisionByZeroError``."""
        return self._new(div_out(self.value * self.BASE, self._same(other)))

    def unsafe_div(self: F, other: F) -> F:
        """Like `div`, but a zero divisor yields ``ONE`` (0/0), ``MAX`` or ``MIN``."""
        if self._same(other) == 0:
            return self._saturate()
        return self.div(other)

    def unsafe_div_out(self: F, other: F) -> F:
        """Like `div_out`, but a zero divisor yields ``ONE`` (0/0), ``MAX`` or ``MIN``."""
        if self._same(other) == 0:
            return self._saturate()
        return self.div_out(other)

    def muldiv(self: F, b: Union[F, int], c: Union[F, int]) -> F:
        """``self * b / c`` at full precision, rounding toward zero.

        `b` and `c` are either values of this format or plain integers.
        """
        return self._new(div_trunc(self.value * self._operand(b), self._operand(c)))

    def muldiv_out(self: F, b: Union[F, int], c: Union[F, int]) -> F:
        """``self * b / c`` at full precision, rounding away from zero."""
        return self._new(div_out(self.value * self._operand(b), self._operand(c)))

    def neg(self: F) -> F:
        self._require_signed("neg")
        return self._new(-self.value)

    def abs(self) -> FixedPoint:
        """Magnitude; signed formats return their unsigned counterpart."""
        if not self.SIGNED:
            return self
        return self.UNSIGNED_TYPE(abs_val(self.value))

    def sign(self) -> int:
        return sign(self.value)

    def is_zero(self) -> bool:
        return self.value == 0

    def truncate(self) -> int:
        """Integer part, rounding toward zero."""
        return div_trunc(self.value, self.BASE)

    # -- Comparison ---------------------------------------------------------

    def eq(self: F, other: F) -> bool:
        return self.value == self._same(other)

    def gt(self: F, other: F) -> bool:
        return self.value > self._same(other)

    def lt(self: F, other: F) -> bool:
        return self.value < self._same(other)

    def gte(self: F, other: F) -> bool:
        return self.value >= self._same(other)

    def lte(self: F, other: F) -> bool:
        return self.value <= self._same(other)

    def compare(self: F, other: F) -> int:
        """-1, 0 or 1 as self is below, equal to or above `other`."""
        return sign(self.value - self._same(other))

    def min(self: F, other: F) -> F:
        return self if self.value <= self._same(other) else other

    def max(self: F, other: F) -> F:
        return self if self.value >= self._same(other) else other

    # -- Persistence --------------------------------------------------------

    def pack(self) -> PackedFixedPoint:
        packed = self.PACKED
        if self.value > packed.MAX_RAW:
            raise PackingOverflowError(packed.__name__, self.value)
        if self.value < packed.MIN_RAW:
            raise PackingUnderflowError(packed.__name__, self.value)
        return packed(self.value)

    def store(self, storage: Storage, key: Key) -> None:
        storage.write(key, to_word(self.value, self.SIGNED))

    def __str__(self) -> str:
        whole, frac = divmod(abs_val(self.value), self.BASE)
        text = str(whole)
        if frac:
            text += "." + str(frac).rjust(self.DECIMALS, "0").rstrip("0")
        return "-" + text if self.value < 0 else text


def _format(decimals: int, signed: bool) -> Callable[[type], type]:
    def wrap(cls: type) -> type:
        cls.DECIMALS = decimals
        cls.SIGNED = signed
        cls.BASE = 10**decimals
        if signed:
            cls.MIN_RAW = -(1 << (BACKING_BITS - 1))
            cls.MAX_RAW = (1 << (BACKING_BITS - 1)) - 1
        else:
            cls.MIN_RAW = 0
            cls.MAX_RAW = (1 << BACKING_BITS) - 1
        cls.ZERO = cls(0)
        cls.ONE = cls(cls.BASE)
        cls.MAX = cls(cls.MAX_RAW)
        if signed:
            cls.NEG_ONE = cls(-cls.BASE)
            cls.MIN = cls(cls.MIN_RAW)
        return cls

    return wrap


@_format(decimals=6, signed=True)
class Fixed6(FixedPoint):
    pass


@_format(decimals=6, signed=False)
class UFixed6(FixedPoint):
    pass


@_format(decimals=18, signed=True)
class Fixed18(FixedPoint):
    pass


@_format(decimals=18, signed=False)
class UFixed18(FixedPoint):
    pass


def _bind(signed: type, unsigned: type, packed_signed: type, packed_unsigned: type) -> None:
    for cls in (signed, unsigned):
        cls.SIGNED_TYPE = signed
        cls.UNSIGNED_TYPE = unsigned
    signed.PACKED, packed_signed.UNPACKED = packed_signed, signed
    unsigned.PACKED, packed_unsigned.UNPACKED = packed_unsigned, unsigned


_bind(Fixed6, UFixed6, PackedFixed6, PackedUFixed6)
_bind(Fixed18, UFixed18, PackedFixed18, PackedUFixed18)
