"""`number`: fixed-point decimal arithmetic with explicit rounding.

Public API:
- `Fixed6`, `UFixed6`, `Fixed18`, `UFixed18` (frozen value objects)
- `PackedFixed6`, `PackedUFixed6`, `PackedFixed18`, `PackedUFixed18`
- the error types of `errors.py`
"""

from .errors import (
    DivisionByZeroError,
    FixedOverflowError,
    FixedPointError,
    FixedUnderflowError,
    PackingOverflowError,
    PackingUnderflowError,
)
from .fixed import Fixed6, Fixed18, FixedPoint, UFixed6, UFixed18
from .packed import PackedFixed6, PackedFixed18, PackedFixedPoint, PackedUFixed6, PackedUFixed18

__all__ = [
    "FixedPoint",
    "Fixed6",
    "UFixed6",
    "Fixed18",
    "UFixed18",
    "PackedFixedPoint",
    "PackedFixed6",
    "PackedUFixed6",
    "PackedFixed18",
    "PackedUFixed18",
    "FixedPointError",
    "FixedOverflowError",
    "FixedUnderflowError",
    "PackingOverflowError",
    "PackingUnderflowError",
    "DivisionByZeroError",
]
