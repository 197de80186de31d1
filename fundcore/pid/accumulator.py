"""Funding accumulator: integrates a capped controller rate into a notional cost.

Over ``[from, to]`` the controller's rate path is piecewise linear:

    rate
     |            ______________  capped
     |          /
     |        /
     | value /
     +------+------+-------------+--> t
          from  intercept        to

The accrued cost is the trapezoid up to the intercept plus the rectangle after
it, converted from an annual rate to a per-second cost and scaled by notional:

    cost = area(value + capped, from, intercept) / 2 + area(capped, intercept, to)
    area(rate, a, b) = rate * (b - a) * notional / SECONDS_PER_YEAR

Every step rounds toward zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..number import Fixed6, UFixed6
from ..state.storage import Key, Storage, slot_offset
from .controller import PController6

SECONDS_PER_YEAR: int = 365 * 24 * 60 * 60

_TWO = Fixed6.from_int(2)
_YEAR = Fixed6.from_int(SECONDS_PER_YEAR)


def _area(rate: Fixed6, from_timestamp: UFixed6, to_timestamp: UFixed6, notional: Fixed6) -> Fixed6:
    return (
        rate.mul(Fixed6.from_unsigned(to_timestamp.sub(from_timestamp)))
        .mul(notional)
        .div(_YEAR)
    )


@dataclass(frozen=True)
class PAccumulator6:
    """Controller state: the last capped `value` and the `skew` driving the next interval."""

    value: Fixed6 = Fixed6.ZERO
    skew: Fixed6 = Fixed6.ZERO

    def __post_init__(self) -> None:
        for name in ("value", "skew"):
            if not isinstance(getattr(self, name), Fixed6):
                raise TypeError(f"{name} must be a Fixed6")

    def accumulate(
        self,
        controller: PController6,
        skew: Fixed6,
        from_timestamp: int,
        to_timestamp: int,
        notional: Fixed6,
    ) -> tuple[Fixed6, PAccumulator6]:
        """Accrue cost over ``[from_timestamp, to_timestamp]``.

        The stored skew drives the interval; `skew` takes effect from
        `to_timestamp` on. Returns ``(cost, next_state)``; a negative cost is
        a credit.

        Raises:
            InvalidIntervalError: ``from_timestamp > to_timestamp``.
        """
        if not isinstance(skew, Fixed6) or not isinstance(notional, Fixed6):
            raise TypeError("skew and notional must be Fixed6")

        new_value, intercept = controller.compute(self.value, self.skew, from_timestamp, to_timestamp)

        uncapped = _area(self.value.add(new_value), UFixed6.from_int(from_timestamp), intercept, notional).div(_TWO)
        capped = _area(new_value, intercept, UFixed6.from_int(to_timestamp), notional)

        return uncapped.add(capped), PAccumulator6(value=new_value, skew=skew)

    # -- Persistence (two consecutive words: value, skew) --------------------

    def store(self, storage: Storage, key: Key) -> None:
        self.value.store(storage, key)
        self.skew.store(storage, slot_offset(key, 1))

    @classmethod
    def read(cls, storage: Storage, key: Key) -> PAccumulator6:
        return cls(
            value=Fixed6.read(storage, key),
            skew=Fixed6.read(storage, slot_offset(key, 1)),
        )

    def to_dict(self) -> dict[str, int]:
        """Raw scaled integers, suitable for JSON."""
        return {"value": self.value.value, "skew": self.skew.value}

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> PAccumulator6:
        """Inverse of `to_dict`. Raises KeyError on missing fields."""
        kwargs: dict[str, Fixed6] = {}
        for name in ("value", "skew"):
            val = d[name]
            if not isinstance(val, int) or isinstance(val, bool):
                raise TypeError(f"{name!r} must be int, got {type(val).__name__}")
            kwargs[name] = Fixed6(int(val))
        return cls(**kwargs)
