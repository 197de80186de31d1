"""Proportional controller over a capped, linearly extrapolated value.

``compute`` is a pure function. Given the value at ``from_timestamp`` and a
constant skew, the uncapped path is

    value(t) = value + skew * (t - from_timestamp) / k

The result is clamped to ``[-max, max]``, and the intercept timestamp reports
when the uncapped path reaches the bound it is clamped against. Timestamps are
integer seconds on input; the intercept is a `UFixed6` so it can be mixed with
rate values without rescaling.

Intercept rules (all results are capped at ``to_timestamp``):
- no clamping and the stored value within the band: ``to_timestamp``, without
  solving for the crossing;
- zero rate of change (zero skew or zero elapsed time): ``to_timestamp``, even
  when the stored value is already past the bound;
- nonzero rate with the stored value already past the bound: ``from_timestamp``;
- otherwise the crossing time, rounded toward zero.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..number import Fixed6, UFixed6
from .errors import InvalidIntervalError

# Crossing time of a path with zero rate of change.
NEVER: UFixed6 = UFixed6.MAX


def _require_timestamp(name: str, ts: int) -> None:
    if not isinstance(ts, int) or isinstance(ts, bool):
        raise TypeError(f"{name} must be an int")
    if ts < 0:
        raise ValueError(f"{name} must be non-negative: {ts}")


def crossing_timestamp(value: Fixed6, new_value: Fixed6, bound: UFixed6, from_timestamp: int, elapsed: int) -> UFixed6:
    """When the line from `value` to `new_value` over `elapsed` seconds leaves ``[-bound, bound]``.

    Returns `NEVER` for a flat line and `from_timestamp` when `value` is already
    outside the band. The result may lie beyond the end of the interval.
    """
    range_ = new_value.sub(value)
    if range_.is_zero():
        return NEVER

    upper = Fixed6.from_unsigned(bound)
    lower = upper.neg()
    if value.gt(upper) or value.lt(lower):
        buffer = UFixed6.ZERO
    elif range_.sign() > 0:
        buffer = upper.sub(value).abs()
    else:
        buffer = value.sub(lower).abs()

    distance = UFixed6.from_int(elapsed)
    return UFixed6.from_int(from_timestamp).add(distance.muldiv(buffer, range_.abs()))


@dataclass(frozen=True)
class PController6:
    """Controller parameters: gain divisor `k` and symmetric clamp bound `max`."""

    k: UFixed6
    max: UFixed6

    def __post_init__(self) -> None:
        for name in ("k", "max"):
            if not isinstance(getattr(self, name), UFixed6):
                raise TypeError(f"{name} must be a UFixed6")

    def compute(
        self,
        value: Fixed6,
        skew: Fixed6,
        from_timestamp: int,
        to_timestamp: int,
    ) -> tuple[Fixed6, UFixed6]:
        """Return ``(capped_value, intercept_timestamp)`` for ``[from_timestamp, to_timestamp]``.

        Raises:
            InvalidIntervalError: ``from_timestamp > to_timestamp``.
            ZeroDivisionError: ``k`` is zero and the interval is non-empty.
        """
        _require_timestamp("from_timestamp", from_timestamp)
        _require_timestamp("to_timestamp", to_timestamp)
        if from_timestamp > to_timestamp:
            raise InvalidIntervalError(from_timestamp, to_timestamp)

        elapsed = to_timestamp - from_timestamp
        new_value = value
        if elapsed:
            new_value = value.add(Fixed6.from_int(elapsed).muldiv(skew, Fixed6.from_unsigned(self.k)))

        capped = self.clamp(new_value)
        # both ends inside the band: the path never reaches the bound before `to`
        if capped == new_value and self.clamp(value) == value:
            return capped, UFixed6.from_int(to_timestamp)

        intercept = crossing_timestamp(value, new_value, self.max, from_timestamp, elapsed)
        return capped, intercept.min(UFixed6.from_int(to_timestamp))

    def clamp(self, value: Fixed6) -> Fixed6:
        """`value` limited to ``[-max, max]``."""
        bound = Fixed6.from_unsigned(self.max)
        return value.min(bound).max(bound.neg())
