"""`accumulator`: running totals with floor rounding and checkpoint deltas."""

from .accumulator import Accumulator6, UAccumulator6

__all__ = ["Accumulator6", "UAccumulator6"]
