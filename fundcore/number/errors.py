"""Exception types for the fixed-point number library.

Every failure is raised synchronously to the direct caller. Nothing in the
library retries or substitutes a value, except the ``unsafe_div*`` family,
which returns a saturation value instead of raising.
"""

from __future__ import annotations


class FixedPointError(Exception):
    """Base class for fixed-point range and division failures."""


class FixedOverflowError(FixedPointError):
    """Raised when a raw value does not fit the backing integer of a format."""

    def __init__(self, type_name: str, value: int) -> None:
        self.type_name = type_name
        self.value = value
        super().__init__(f"{type_name} overflow: {value}")


class FixedUnderflowError(FixedPointError):
    """Raised when an unsigned format would hold a negative value."""

    def __init__(self, type_name: str, value: int) -> None:
        self.type_name = type_name
        self.value = value
        super().__init__(f"{type_name} underflow: {value}")


class PackingOverflowError(FixedPointError):
    """Raised when a value exceeds the maximum of its packed encoding."""

    def __init__(self, type_name: str, value: int) -> None:
        self.type_name = type_name
        self.value = value
        super().__init__(f"{type_name} packing overflow: {value}")


class PackingUnderflowError(FixedPointError):
    """Raised when a value is below the minimum of its packed encoding."""

    def __init__(self, type_name: str, value: int) -> None:
        self.type_name = type_name
        self.value = value
        super().__init__(f"{type_name} packing underflow: {value}")


class DivisionByZeroError(FixedPointError, ZeroDivisionError):
    """Raised by the round-away-from-zero division forms on a zero divisor.

    Plain truncating division lets Python's own ``ZeroDivisionError`` through;
    this subclass marks the explicit check done by the ``*_out`` forms.
    """

    def __init__(self, numerator: int = 0) -> None:
        self.numerator = numerator
        super().__init__("division by zero")
