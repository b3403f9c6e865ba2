from __future__ import annotations

import argparse
import random
from typing import Iterable, List

from leapcal.core.calendar import days_in_month
from leapcal.core.context import TimeContext
from leapcal.core.epoch import from_epoch_offset, to_epoch
from leapcal.core.normalize import is_valid
from leapcal.core.types import Timestamp
from leapcal.reference.leapfile import find_leap_file, load_context


def random_timestamp(ctx: TimeContext, y0: int, y1: int) -> Timestamp:
    """Uniformly random valid Timestamp in [y0, y1] (leap instants included)."""
    y = random.randint(y0, y1)
    m = random.randint(1, 12)
    d = random.randint(1, days_in_month(y, m))
    t = Timestamp(y, m, d, random.randint(0, 23), random.randint(0, 59))
    return t.shift(seconds=random.randint(0, ctx.seconds_in_minute(t) - 1))


def offsets_to_check(ctx: TimeContext, y0: int, y1: int, step: int, window: int) -> Iterable[int]:
    """Strided offsets over [y0, y1] plus every second within `window` of each leap second."""
    lo = to_epoch(Timestamp(y0), ctx)
    hi = to_epoch(Timestamp(y1 + 1), ctx)
    yield from range(lo, hi, step)
    for delta in ctx.leap_deltas:
        yield from range(max(lo, delta - window), min(hi, delta + window + 1))


def offset_round_trip(ctx: TimeContext, offsets: Iterable[int], *, max_failures: int) -> int:
    failures = 0
    for n in offsets:
        t = from_epoch_offset(n, ctx)
        back = to_epoch(t, ctx)
        if back != n or not is_valid(t, ctx):
            failures += 1
            print("\nFAIL (offset -> timestamp -> offset)")
            print("offset:", n)
            print("timestamp:", t, "valid:", is_valid(t, ctx))
            print("back:", back)
            if failures >= max_failures:
                return failures
    return failures


def timestamp_round_trip(ctx: TimeContext, samples: List[Timestamp], *, max_failures: int) -> int:
    failures = 0
    for t in samples:
        back = from_epoch_offset(to_epoch(t, ctx), ctx)
        if back != t:
            failures += 1
            print("\nFAIL (timestamp -> offset -> timestamp)")
            print("timestamp:", t)
            print("back:", back)
            if failures >= max_failures:
                return failures
    return failures


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Round-trip checks: epoch offset <-> Timestamp.")
    p.add_argument("--epoch-year", type=int, default=1900, help="Epoch year.")
    p.add_argument("--leap-file", default=None, help="leap-seconds.list (default: configured/packaged).")
    p.add_argument("--start-year", type=int, default=None, help="First year swept (default: epoch year).")
    p.add_argument("--end-year", type=int, default=2100, help="Last year swept.")
    p.add_argument("--step", type=int, default=86399, help="Offset stride in seconds.")
    p.add_argument("--window", type=int, default=180, help="Seconds checked on each side of a leap second.")
    p.add_argument("--N", type=int, default=2000, help="Random timestamps checked.")
    p.add_argument("--seed", type=int, default=123, help="RNG seed.")
    p.add_argument("--max-failures", type=int, default=5, help="Stop after this many failures per check.")
    args = p.parse_args(argv)

    y0 = args.epoch_year if args.start_year is None else args.start_year
    if args.end_year < y0:
        raise SystemExit("--end-year must be >= --start-year")
    if y0 < args.epoch_year:
        raise SystemExit("--start-year must be >= --epoch-year")

    ctx = load_context(args.epoch_year, args.leap_file or find_leap_file())
    print(f"Epoch {ctx.epoch_year}, {len(ctx.leap_instants)} leap seconds from {ctx.source}")

    print(f"Sweeping offsets {y0}..{args.end_year} (step {args.step}s, window {args.window}s) ...")
    f1 = offset_round_trip(
        ctx, offsets_to_check(ctx, y0, args.end_year, args.step, args.window), max_failures=args.max_failures
    )

    random.seed(args.seed)
    print(f"Checking {args.N} random timestamps ...")
    samples = [random_timestamp(ctx, y0, args.end_year) for _ in range(args.N)]
    samples += list(ctx.leap_instants)
    f2 = timestamp_round_trip(ctx, samples, max_failures=args.max_failures)

    total_fail = f1 + f2
    if total_fail == 0:
        print("All round-trip tests passed.")
        return 0

    print(f"Round-trip failures: {total_fail}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
