#!/usr/bin/env python3
"""
Replay a skew schedule through the funding accumulator.

Example:
  python3 tools/funding_sim.py --config config/funding.example.yaml \
      --interval 3600 --steps 24 --skew 0.5 --notional 1000

`--skew` may be given several times; step i uses the i-th value (the last one
repeats). Exit status: 0 ok, 1 computation error, 2 bad config.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fundcore.config import ConfigError, load_funding_config  # noqa: E402
from fundcore.logging import get_logger, setup_logging  # noqa: E402
from fundcore.number import Fixed6, FixedPointError  # noqa: E402
from fundcore.pid import StoredPAccumulator6  # noqa: E402
from fundcore.state import MemoryStorage, slot  # noqa: E402

log = get_logger("funding_sim")


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    ap.add_argument("--config", required=True, help="funding config YAML")
    ap.add_argument("--interval", type=int, default=3600, help="seconds per step")
    ap.add_argument("--steps", type=int, default=24)
    ap.add_argument("--start", type=int, default=0, help="timestamp of the first step")
    ap.add_argument("--skew", action="append", default=[], help="decimal skew per step (repeatable)")
    ap.add_argument("--notional", default="1", help="decimal notional")
    ap.add_argument("--log-level", default="WARNING")
    args = ap.parse_args(argv)

    try:
        setup_logging(args.log_level)
    except ValueError as exc:
        print(f"[funding-sim] {exc}", file=sys.stderr)
        return 2

    try:
        cfg = load_funding_config(args.config)
        skews = [Fixed6.parse(s) for s in args.skew] or [cfg.initial.skew]
        notional = Fixed6.parse(args.notional)
    except (ConfigError, TypeError, ValueError, OSError) as exc:
        print(f"[funding-sim] bad config: {exc}", file=sys.stderr)
        return 2
    if args.interval < 0 or args.steps < 0 or args.start < 0:
        print("[funding-sim] --interval, --steps and --start must be non-negative", file=sys.stderr)
        return 2

    log.info(
        "funding_sim_start",
        k=str(cfg.controller.k),
        max=str(cfg.controller.max),
        steps=args.steps,
        interval=args.interval,
        notional=str(notional),
    )

    acc = StoredPAccumulator6(MemoryStorage(), slot("funding_sim.accumulator"))
    acc.initialize(cfg.initial)

    total = Fixed6.ZERO
    t = args.start
    try:
        for i in range(args.steps):
            skew = skews[min(i, len(skews) - 1)]
            cost = acc.accumulate(cfg.controller, skew, t, t + args.interval, notional)
            total = total.add(cost)
            state = acc.accumulator()
            print(f"step={i} t={t + args.interval} rate={state.value} skew={state.skew} cost={cost}")
            t += args.interval
    except (FixedPointError, ArithmeticError, ValueError) as exc:
        print(f"[funding-sim] FAIL at t={t}: {exc}", file=sys.stderr)
        return 1

    print(f"total_cost={total}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
