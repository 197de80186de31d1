"""Tests for fundcore/number/math.py: integer rounding primitives."""

import random

import pytest

from fundcore.number import DivisionByZeroError
from fundcore.number.math import abs_val, div_out, div_trunc, sign


class TestAbsVal:
    def test_positive(self):
        assert abs_val(42) == 42

    def test_negative(self):
        assert abs_val(-42) == 42

    def test_zero(self):
        assert abs_val(0) == 0


class TestSign:
    def test_values(self):
        assert sign(17) == 1
        assert sign(-17) == -1
        assert sign(0) == 0


class TestDivTrunc:
    def test_exact(self):
        assert div_trunc(20, 10) == 2
        assert div_trunc(-20, 10) == -2

    def test_rounds_toward_zero(self):
        assert div_trunc(21, 10) == 2
        assert div_trunc(-21, 10) == -2
        assert div_trunc(21, -10) == -2
        assert div_trunc(-21, -10) == 2

    def test_differs_from_floor_division_for_negatives(self):
        assert -21 // 10 == -3
        assert div_trunc(-21, 10) == -2

    def test_zero_divisor_is_builtin_error(self):
        with pytest.raises(ZeroDivisionError) as exc:
            div_trunc(1, 0)
        assert not isinstance(exc.value, DivisionByZeroError)


class TestDivOut:
    def test_unsigned(self):
        assert div_out(20, 10) == 2
        assert div_out(21, 10) == 3
        assert div_out(0, 10) == 0

    def test_signed(self):
        assert div_out(-20, 10) == -2
        assert div_out(20, -10) == -2
        assert div_out(-21, 10) == -3
        assert div_out(21, -10) == -3
        assert div_out(-21, -10) == 3

    def test_zero_divisor(self):
        with pytest.raises(DivisionByZeroError):
            div_out(21, 0)

    def test_zero_divisor_is_also_zero_division_error(self):
        with pytest.raises(ZeroDivisionError):
            div_out(0, 0)


class TestRoundingRelation:
    def test_out_and_trunc_differ_by_at_most_one(self):
        rng = random.Random(0)
        for _ in range(2000):
            a = rng.randint(-(10**40), 10**40)
            b = rng.choice([-1, 1]) * rng.randint(1, 10**20)
            t = div_trunc(a, b)
            o = div_out(a, b)
            assert abs_val(o) >= abs_val(t)
            assert abs_val(o - t) <= 1
            assert (o == t) == (a % b == 0)
