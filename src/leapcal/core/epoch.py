from __future__ import annotations

from dataclasses import replace
from typing import Tuple

from .calendar import (
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_YEAR,
    TYPICAL_SECONDS_PER_MINUTE,
    days_before_month,
    leap_days_between,
)
from .context import TimeContext
from .types import Timestamp


def to_epoch(t: Timestamp, ctx: TimeContext) -> int:
    """
    Seconds since the context epoch, counting leap days AND leap seconds.

    Month lengths are taken uncorrected; the leap-day correction for every
    year walked through since the epoch is applied in one go via
    leap_days_between().
    """
    total = days_before_month(t.month) * SECONDS_PER_DAY
    total += (t.year - ctx.epoch_year) * SECONDS_PER_YEAR
    total += (t.day - 1) * SECONDS_PER_DAY + t.hour * SECONDS_PER_HOUR + t.minute * TYPICAL_SECONDS_PER_MINUTE
    total += leap_days_between(ctx.epoch, t) * SECONDS_PER_DAY
    total += ctx.leap_seconds_before(t)
    return total + t.second


def to_epoch_frac(t: Timestamp, ctx: TimeContext) -> Tuple[int, float]:
    """(whole seconds since epoch, fractional seconds)."""
    return to_epoch(t, ctx), t.frac


def from_epoch_offset(seconds: int, ctx: TimeContext, frac: float = 0.0) -> Timestamp:
    """
    Timestamp `seconds` (+ `frac`) after the context epoch.

    The offset is dropped straight into the second field of the epoch and
    the resulting out-of-range value is normalized.
    """
    from .normalize import adjust

    e = ctx.epoch
    return adjust(replace(e, second=e.second + seconds, frac=e.frac + frac), ctx)


def difference(a: Timestamp, b: Timestamp, ctx: TimeContext) -> float:
    """
    a - b in seconds, leap seconds included.

    Whole seconds are subtracted as integers before fractions are combined.
    """
    whole = to_epoch(a, ctx) - to_epoch(b, ctx)
    return float(whole) + (a.frac - b.frac)
