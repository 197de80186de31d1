"""Integer rounding primitives shared by every fixed-point format.

Every function is stateless and operates on plain Python ints. Python's ``//``
floors toward -inf; the helpers below give the two rounding modes the
fixed-point library is built on:

- ``div_trunc``: toward zero (magnitude rounded down),
- ``div_out``: away from zero (magnitude rounded up).
"""

from __future__ import annotations

from .errors import DivisionByZeroError


def abs_val(x: int) -> int:
    """Absolute value of *x*."""
    return x if x >= 0 else -x


def sign(x: int) -> int:
    """-1, 0 or 1 according to the sign of *x*."""
    if x > 0:
        return 1
    if x < 0:
        return -1
    return 0


def div_trunc(a: int, b: int) -> int:
    """``a / b`` rounded toward zero.

    Raises the built-in ``ZeroDivisionError`` when ``b == 0``.
    """
    q = abs_val(a) // abs_val(b)
    return -q if (a < 0) != (b < 0) else q


def div_out(a: int, b: int) -> int:
    """``a / b`` rounded away from zero.

    Raises ``DivisionByZeroError`` when ``b == 0``.
    """
    if b == 0:
        raise DivisionByZeroError(a)
    q, r = divmod(abs_val(a), abs_val(b))
    if r:
        q += 1
    return -q if (a < 0) != (b < 0) else q
