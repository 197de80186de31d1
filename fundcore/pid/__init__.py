"""`pid`: proportional controller and the funding accumulator built on it.

Public API:
- `PController6(k, max).compute(value, skew, from_ts, to_ts) -> (capped, intercept)`
- `PAccumulator6(value, skew).accumulate(controller, skew, from_ts, to_ts, notional) -> (cost, next)`
- `StoredPAccumulator6(storage, key)`: the same transition applied to a persisted checkpoint
"""

from .accumulator import SECONDS_PER_YEAR, PAccumulator6
from .controller import NEVER, PController6, crossing_timestamp
from .errors import InvalidIntervalError
from .stored import StoredPAccumulator6

__all__ = [
    "PController6",
    "PAccumulator6",
    "StoredPAccumulator6",
    "InvalidIntervalError",
    "NEVER",
    "SECONDS_PER_YEAR",
    "crossing_timestamp",
]
