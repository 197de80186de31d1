"""
fundcore: fixed-point arithmetic and funding-rate control for margin settlement
"""

from .accumulator import Accumulator6, UAccumulator6
from .number import Fixed6, Fixed18, UFixed6, UFixed18
from .pid import PAccumulator6, PController6, StoredPAccumulator6

__all__ = [
    "Fixed6",
    "UFixed6",
    "Fixed18",
    "UFixed18",
    "Accumulator6",
    "UAccumulator6",
    "PController6",
    "PAccumulator6",
    "StoredPAccumulator6",
]
