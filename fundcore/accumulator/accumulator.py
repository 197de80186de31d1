"""
Checkpoint accumulators (deterministic, integer-only).

An accumulator is a running total of ``amount / total`` increments. Callers
keep an earlier accumulator as a checkpoint and later ask for the amount
accrued since it over some `total`.

Rounding is floor (toward -inf) in both directions, using Python's ``//``:
an increment of ``-0.000001`` over ``2`` moves the value to ``-0.000001``.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..number import DivisionByZeroError, Fixed6, UFixed6
from ..state.storage import Key, Storage


def _floor_div(amount: int, total: UFixed6) -> int:
    if total.is_zero():
        raise DivisionByZeroError(amount)
    return (amount * UFixed6.BASE) // total.value


@dataclass(frozen=True)
class Accumulator6:
    """Signed accumulator. ``increment``/``decrement`` return the advanced accumulator."""

    value: Fixed6 = Fixed6.ZERO

    def __post_init__(self) -> None:
        if not isinstance(self.value, Fixed6):
            raise TypeError("value must be a Fixed6")

    def increment(self, amount: Fixed6, total: UFixed6) -> Accumulator6:
        """Add ``floor(amount / total)``."""
        return Accumulator6(self.value.add(Fixed6(_floor_div(amount.value, total))))

    def decrement(self, amount: Fixed6, total: UFixed6) -> Accumulator6:
        """Subtract ``amount / total``; the result is floored like `increment`."""
        return Accumulator6(self.value.add(Fixed6(_floor_div(-amount.value, total))))

    def accumulated(self, from_: Accumulator6, total: UFixed6) -> Fixed6:
        """``floor((value - from_.value) * total)``: the accrual since `from_`."""
        delta = self.value.sub(from_.value)
        return Fixed6((delta.value * total.value) // UFixed6.BASE)

    def store(self, storage: Storage, key: Key) -> None:
        self.value.store(storage, key)

    @classmethod
    def read(cls, storage: Storage, key: Key) -> Accumulator6:
        return cls(Fixed6.read(storage, key))


@dataclass(frozen=True)
class UAccumulator6:
    """Unsigned accumulator; it can only move up."""

    value: UFixed6 = UFixed6.ZERO

    def __post_init__(self) -> None:
        if not isinstance(self.value, UFixed6):
            raise TypeError("value must be a UFixed6")

    def increment(self, amount: UFixed6, total: UFixed6) -> UAccumulator6:
        return UAccumulator6(self.value.add(UFixed6(_floor_div(amount.value, total))))

    def accumulated(self, from_: UAccumulator6, total: UFixed6) -> UFixed6:
        delta = self.value.sub(from_.value)
        return UFixed6((delta.value * total.value) // UFixed6.BASE)

    def store(self, storage: Storage, key: Key) -> None:
        self.value.store(storage, key)

    @classmethod
    def read(cls, storage: Storage, key: Key) -> UAccumulator6:
        return cls(UFixed6.read(storage, key))
