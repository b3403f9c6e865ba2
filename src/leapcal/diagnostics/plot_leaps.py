#!/usr/bin/env python3
from __future__ import annotations

import argparse

from leapcal.core.epoch import difference
from leapcal.core.format import parse_timestamp
from leapcal.core.types import Timestamp
from leapcal.reference.leapfile import find_leap_file, load_context


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "leapcal[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "leapcal[diagnostics]"') from e


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Plot leap seconds and leap-aware vs naive elapsed time.")
    p.add_argument("--epoch-year", type=int, default=1960, help="Epoch year.")
    p.add_argument("--leap-file", default=None, help="leap-seconds.list (default: configured/packaged).")
    p.add_argument("--start", default="1970-01-01", help="Start instant for the drift curve.")
    p.add_argument("--y1", type=int, default=2030, help="Last year plotted.")
    p.add_argument("--out", default="leap_seconds.png", help="output image filename")
    args = p.parse_args(argv)

    np = _need_numpy()
    plt = _need_matplotlib()

    ctx = load_context(args.epoch_year, args.leap_file or find_leap_file())
    start = parse_timestamp(args.start)
    if start.year > args.y1:
        raise SystemExit("--start must be before --y1")

    # cumulative count as a step function of decimal year
    leap_years = np.array(
        [t.year + (t.month - 1) / 12.0 + (t.day - 1) / 365.25 for t in ctx.leap_instants],
        dtype=float,
    )
    counts = np.arange(1, len(leap_years) + 1)

    # drift: leap-aware elapsed seconds minus naive (datetime) elapsed seconds, yearly
    years = np.arange(start.year, args.y1 + 1)
    t0 = start.to_datetime()
    drift = np.array(
        [
            difference(Timestamp(int(y)), start, ctx) - (Timestamp(int(y)).to_datetime() - t0).total_seconds()
            for y in years
        ],
        dtype=float,
    )

    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(10, 7), sharex=True)
    if len(leap_years):
        ax1.step(leap_years, counts, where="post", linewidth=2)
    ax1.set_title(f"Leap seconds after epoch {ctx.epoch_year} ({ctx.source})")
    ax1.set_ylabel("cumulative count")
    ax1.grid(True, alpha=0.3)

    ax2.plot(years, drift, marker="o", markersize=3, linewidth=1.5)
    ax2.set_title(f"Leap-aware minus naive elapsed time since {start}")
    ax2.set_xlabel("Year")
    ax2.set_ylabel("seconds")
    ax2.grid(True, alpha=0.3)

    fig.tight_layout()
    fig.savefig(args.out, dpi=200)
    print(f"Saved: {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
