"""Property checks for the controller and funding accumulator."""

from __future__ import annotations

import hypothesis.strategies as st
from hypothesis import given, settings

from fundcore.number import Fixed6, UFixed6
from fundcore.pid import PAccumulator6, PController6

raw_rate = st.integers(min_value=-(10**12), max_value=10**12)
raw_bound = st.integers(min_value=0, max_value=10**12)
raw_gain = st.integers(min_value=1, max_value=10**12)
elapsed = st.integers(min_value=0, max_value=10**6)


@settings(max_examples=300, deadline=None)
@given(raw=st.integers(min_value=-(10**15), max_value=10**15), bound=raw_bound)
def test_clamp_idempotent(raw: int, bound: int) -> None:
    controller = PController6(k=UFixed6.ONE, max=UFixed6(bound))
    once = controller.clamp(Fixed6(raw))
    assert controller.clamp(once) == once
    assert -bound <= once.value <= bound


@settings(max_examples=300, deadline=None)
@given(
    k=raw_gain,
    bound=raw_bound,
    value=raw_rate,
    skew_a=raw_rate,
    skew_b=raw_rate,
    dt=elapsed,
)
def test_capped_value_monotone_in_skew(k: int, bound: int, value: int, skew_a: int, skew_b: int, dt: int) -> None:
    lo, hi = sorted((skew_a, skew_b))
    controller = PController6(k=UFixed6(k), max=UFixed6(bound))
    start = 1_000
    a, _ = controller.compute(Fixed6(value), Fixed6(lo), start, start + dt)
    b, _ = controller.compute(Fixed6(value), Fixed6(hi), start, start + dt)
    assert a.lte(b)


@settings(max_examples=300, deadline=None)
@given(
    k=raw_gain,
    bound=st.integers(min_value=1, max_value=10**9),
    skew=raw_rate,
    notional=st.integers(min_value=-(10**12), max_value=10**12),
    dt=elapsed,
    data=st.data(),
)
def test_cost_sign_follows_rate_and_notional(k, bound, skew, notional, dt, data) -> None:
    value = data.draw(st.integers(min_value=-bound, max_value=bound))
    controller = PController6(k=UFixed6(k), max=UFixed6(bound))
    state = PAccumulator6(value=Fixed6(value), skew=Fixed6(skew))

    cost, nxt = state.accumulate(controller, Fixed6.ZERO, 0, dt, Fixed6(notional))
    flipped, _ = state.accumulate(controller, Fixed6.ZERO, 0, dt, Fixed6(-notional))

    assert flipped == cost.neg()
    if value >= 0 and nxt.value.value >= 0 and notional >= 0:
        assert cost.sign() >= 0
