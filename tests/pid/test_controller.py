"""Tests for fundcore/pid/controller.py: capped proportional controller."""

import random

import pytest

from fundcore.number import Fixed6, UFixed6
from fundcore.pid import NEVER, InvalidIntervalError, PController6, crossing_timestamp


def f6(n):
    return Fixed6.from_int(n)


def u6(n):
    return UFixed6.from_int(n)


CONTROLLER = PController6(k=u6(10), max=u6(10_000))
LOW_MAX = PController6(k=u6(10), max=u6(1_000))
VERY_LOW_MAX = PController6(k=u6(10), max=u6(100))

VALUE = f6(500)
SKEW = f6(100)
FROM = 0
TO = 100


class TestCompute:
    def test_uncapped(self):
        assert CONTROLLER.compute(VALUE, SKEW, FROM, TO) == (f6(1_500), u6(100))

    def test_uncapped_from_negative(self):
        assert CONTROLLER.compute(f6(-500), SKEW, FROM, TO) == (f6(500), u6(100))

    def test_negative_skew(self):
        assert CONTROLLER.compute(VALUE, f6(-100), FROM, TO) == (f6(-500), u6(100))

    def test_capped_midway(self):
        assert LOW_MAX.compute(VALUE, SKEW, FROM, TO) == (f6(1_000), u6(50))

    def test_capped_from_negative(self):
        assert LOW_MAX.compute(f6(-500), f6(300), FROM, TO) == (f6(1_000), u6(50))

    def test_capped_at_lower_bound(self):
        assert LOW_MAX.compute(f6(-500), f6(-100), FROM, TO) == (f6(-1_000), u6(50))

    def test_already_past_bound(self):
        assert VERY_LOW_MAX.compute(VALUE, SKEW, FROM, TO) == (f6(100), u6(FROM))

    def test_already_past_bound_zero_skew(self):
        assert VERY_LOW_MAX.compute(VALUE, Fixed6.ZERO, FROM, TO) == (f6(100), u6(TO))

    def test_past_bound_returning_inside(self):
        assert VERY_LOW_MAX.compute(VALUE, f6(-50), FROM, TO) == (Fixed6.ZERO, u6(FROM))

    def test_unclamped_with_huge_bound(self):
        # the crossing time of this path overflows UFixed6
        controller = PController6(k=u6(1), max=UFixed6(2**255 - 1))
        assert controller.compute(Fixed6.ZERO, Fixed6(1), 0, 100) == (Fixed6(100), u6(100))

    def test_zero_skew(self):
        assert CONTROLLER.compute(VALUE, Fixed6.ZERO, FROM, TO) == (VALUE, u6(TO))

    def test_zero_elapsed(self):
        assert CONTROLLER.compute(VALUE, SKEW, 100, 100) == (VALUE, u6(100))

    def test_nonzero_start(self):
        controller = PController6(k=u6(100), max=u6(1_000))
        start, end = 1_626_156_000, 1_626_159_000
        assert controller.compute(VALUE, f6(10), start, end) == (f6(800), u6(end))

    def test_nonzero_start_already_capped(self):
        controller = PController6(k=u6(100), max=u6(100))
        start, end = 1_626_156_000, 1_626_159_000
        assert controller.compute(VALUE, f6(10), start, end) == (f6(100), u6(start))

    def test_fractional_crossing_rounds_toward_zero(self):
        controller = PController6(k=u6(3), max=u6(1))
        capped, intercept = controller.compute(Fixed6.ZERO, f6(1), 0, 10)
        assert capped == f6(1)
        assert intercept == UFixed6(3_000_000)

    def test_invalid_interval(self):
        with pytest.raises(InvalidIntervalError) as exc:
            CONTROLLER.compute(VALUE, SKEW, 101, 100)
        assert exc.value.from_timestamp == 101
        assert exc.value.to_timestamp == 100
        assert isinstance(exc.value, ValueError)

    def test_negative_timestamp(self):
        with pytest.raises(ValueError):
            CONTROLLER.compute(VALUE, SKEW, -1, 100)

    def test_zero_gain(self):
        with pytest.raises(ZeroDivisionError):
            PController6(k=UFixed6.ZERO, max=u6(1)).compute(VALUE, SKEW, FROM, TO)

    def test_parameter_types(self):
        with pytest.raises(TypeError):
            PController6(k=f6(10), max=u6(1))


class TestCrossingTimestamp:
    def test_flat_line_never_crosses(self):
        assert crossing_timestamp(VALUE, VALUE, u6(100), 0, 100) == NEVER

    def test_crossing_may_exceed_interval(self):
        # 500 -> 1500 over 100s reaches 10000 far beyond the end
        assert crossing_timestamp(VALUE, f6(1_500), u6(10_000), 0, 100) == u6(950)

    def test_outside_band(self):
        assert crossing_timestamp(f6(-500), f6(0), u6(100), 7, 100) == u6(7)


class TestClamp:
    def test_bounds(self):
        assert LOW_MAX.clamp(f6(5_000)) == f6(1_000)
        assert LOW_MAX.clamp(f6(-5_000)) == f6(-1_000)
        assert LOW_MAX.clamp(f6(3)) == f6(3)

    def test_idempotent(self):
        rng = random.Random(0)
        for _ in range(500):
            controller = PController6(k=u6(1), max=UFixed6(rng.randint(0, 10**12)))
            v = Fixed6(rng.randint(-(10**13), 10**13))
            once = controller.clamp(v)
            assert controller.clamp(once) == once


class TestProperties:
    def test_result_within_bounds(self):
        rng = random.Random(1)
        for _ in range(500):
            controller = PController6(k=UFixed6(rng.randint(1, 10**9)), max=UFixed6(rng.randint(0, 10**9)))
            bound = controller.max.value
            value = Fixed6(rng.randint(-bound, bound))
            skew = Fixed6(rng.randint(-(10**9), 10**9))
            start = rng.randint(0, 10**6)
            end = start + rng.randint(0, 10**5)
            capped, intercept = controller.compute(value, skew, start, end)
            assert -bound <= capped.value <= bound
            assert u6(start).lte(intercept)
            assert intercept.lte(u6(end))

    def test_monotone_in_skew(self):
        rng = random.Random(2)
        controller = PController6(k=u6(50), max=u6(20))
        value = f6(3)
        skews = sorted((Fixed6(rng.randint(-(10**9), 10**9)) for _ in range(200)), key=lambda s: s.value)
        values = [controller.compute(value, s, 0, 600)[0] for s in skews]
        for lo, hi in zip(values, values[1:]):
            assert lo.lte(hi)

    def test_unclamped_path_reports_end(self):
        rng = random.Random(3)
        controller = PController6(k=u6(1_000), max=u6(10**6))
        for _ in range(200):
            value = Fixed6(rng.randint(-(10**9), 10**9))
            skew = Fixed6(rng.randint(-(10**9), 10**9))
            end = rng.randint(1, 10**4)
            assert controller.compute(value, skew, 0, end)[1] == u6(end)
