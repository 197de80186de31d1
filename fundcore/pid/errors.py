"""Exception types for the controller and funding accumulator."""

from __future__ import annotations


class InvalidIntervalError(ValueError):
    """Raised when an interval ends before it starts."""

    def __init__(self, from_timestamp: int, to_timestamp: int) -> None:
        self.from_timestamp = from_timestamp
        self.to_timestamp = to_timestamp
        super().__init__(f"invalid interval: from {from_timestamp} > to {to_timestamp}")
