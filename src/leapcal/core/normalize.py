"""
leapcal.core.normalize
----------------------

Normalization ("adjust") of Timestamps whose fields lie outside their ranges.

The work is an ordered pipeline of fixups, coarse to fine:

    month -> day -> hour -> minute -> second -> frac

Each step takes a (possibly invalid) Timestamp and the context and returns a
Timestamp whose own field is in range. A step assumes every coarser field is
already valid, and re-runs the next coarser step after carrying into it, so
changes ripple back up the chain. The order of NORMALIZATION_STEPS is what
makes those assumptions hold; do not reorder it.

Large offsets are carried in fixed-size blocks first (365-day years,
60-second minutes) and the leap-day / leap-second error this introduces is
removed afterwards, so the cost does not grow with the size of the offset.
"""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Callable, Tuple

from .calendar import (
    HOURS_PER_DAY,
    MAX_YEAR,
    MINUTES_PER_HOUR,
    MONTH_DAYS,
    MONTHS_PER_YEAR,
    TYPICAL_DAYS_PER_YEAR,
    TYPICAL_SECONDS_PER_MINUTE,
    days_in_month,
    leap_days_between,
)
from .context import TimeContext
from .epoch import to_epoch
from .types import Timestamp

NormalizationStep = Callable[[Timestamp, TimeContext], Timestamp]


# ============================================================
# Range predicates
# ============================================================

def year_in_limits(t: Timestamp, ctx: TimeContext) -> bool:
    return ctx.epoch_year <= t.year <= MAX_YEAR


def month_in_limits(t: Timestamp) -> bool:
    return 1 <= t.month <= MONTHS_PER_YEAR


def day_in_limits(t: Timestamp) -> bool:
    return 1 <= t.day <= days_in_month(t.year, t.month)


def hour_in_limits(t: Timestamp) -> bool:
    return 0 <= t.hour < HOURS_PER_DAY


def minute_in_limits(t: Timestamp) -> bool:
    return 0 <= t.minute < MINUTES_PER_HOUR


def second_in_limits(t: Timestamp, ctx: TimeContext) -> bool:
    return 0 <= t.second < ctx.seconds_in_minute(t)


def frac_in_limits(t: Timestamp) -> bool:
    return 0.0 <= t.frac < 1.0


def is_valid(t: Timestamp, ctx: TimeContext) -> bool:
    """Is this a possible date and time under `ctx`?"""
    # short-circuit order matters: day needs a valid month, second a valid minute
    return (
        year_in_limits(t, ctx)
        and month_in_limits(t)
        and day_in_limits(t)
        and hour_in_limits(t)
        and minute_in_limits(t)
        and second_in_limits(t, ctx)
        and frac_in_limits(t)
    )


# ============================================================
# Month stepping
# ============================================================

def _step_month(year: int, month: int, day: int, *, leap_aware: bool) -> Tuple[int, int, int]:
    """
    Bring `day` into range by walking the month forward or back one month at
    a time. With leap_aware=False February always has 28 days.
    """
    def length(y: int, m: int) -> int:
        return days_in_month(y, m) if leap_aware else MONTH_DAYS[m - 1]

    while day > length(year, month):
        day -= length(year, month)
        month += 1
        if month > MONTHS_PER_YEAR:
            year, month = year + 1, 1

    while day < 1:
        month -= 1
        if month < 1:
            year, month = year - 1, MONTHS_PER_YEAR
        day += length(year, month)

    return year, month, day


# ============================================================
# Fixups
# ============================================================

def fix_month(t: Timestamp, ctx: TimeContext) -> Timestamp:
    if month_in_limits(t):
        return t
    count = (t.month - 1) // MONTHS_PER_YEAR
    return replace(t, year=t.year + count, month=t.month - count * MONTHS_PER_YEAR)


def fix_day(t: Timestamp, ctx: TimeContext) -> Timestamp:
    if day_in_limits(t):
        return t

    # march from the first of the month...
    old = Timestamp(t.year, t.month, 1)

    # ...in whole 365-day years first, re-deriving the month with canonical
    # lengths (this leaves an error of one day per leap day crossed)...
    count = (t.day - 1) // TYPICAL_DAYS_PER_YEAR
    year, month, day = _step_month(
        t.year + count, t.month, t.day - count * TYPICAL_DAYS_PER_YEAR, leap_aware=False
    )

    # ...remove that error...
    day -= leap_days_between(old, Timestamp(year, month, day))

    # ...and settle with the true month lengths.
    year, month, day = _step_month(year, month, day, leap_aware=True)
    return replace(t, year=year, month=month, day=day)


def fix_hour(t: Timestamp, ctx: TimeContext) -> Timestamp:
    if hour_in_limits(t):
        return t
    count = t.hour // HOURS_PER_DAY
    return fix_day(replace(t, day=t.day + count, hour=t.hour - count * HOURS_PER_DAY), ctx)


def fix_minute(t: Timestamp, ctx: TimeContext) -> Timestamp:
    if minute_in_limits(t):
        return t
    count = t.minute // MINUTES_PER_HOUR
    return fix_hour(replace(t, hour=t.hour + count, minute=t.minute - count * MINUTES_PER_HOUR), ctx)


def fix_second(t: Timestamp, ctx: TimeContext) -> Timestamp:
    if second_in_limits(t, ctx):
        return t

    pending = t.second
    t = replace(t, second=0)
    old_epoch = to_epoch(t, ctx)

    # coarse carry in typical 60-second minutes; leap seconds ignored here
    count = pending // TYPICAL_SECONDS_PER_MINUTE
    t = fix_minute(replace(t, minute=t.minute + count), ctx)
    t = replace(t, second=pending - count * TYPICAL_SECONDS_PER_MINUTE)
    new_epoch = to_epoch(t, ctx)

    # take back the leap seconds walked through by the coarse carry
    t = replace(t, second=t.second - ctx.leap_seconds_between(old_epoch, new_epoch))
    t = fix_minute(t, ctx)

    # final pass with the true length of each minute
    while t.second >= ctx.seconds_in_minute(t):
        t = fix_minute(replace(t, second=t.second - ctx.seconds_in_minute(t), minute=t.minute + 1), ctx)

    while t.second < 0:
        t = fix_minute(replace(t, minute=t.minute - 1), ctx)
        t = replace(t, second=t.second + ctx.seconds_in_minute(t))

    return t


def fix_frac(t: Timestamp, ctx: TimeContext) -> Timestamp:
    if frac_in_limits(t):
        return t
    count = math.floor(t.frac)
    frac = t.frac - count
    if frac >= 1.0:
        # a tiny negative frac rounds up to 1.0 after the subtraction
        count, frac = count + 1, 0.0
    return fix_second(replace(t, second=t.second + count, frac=frac), ctx)


NORMALIZATION_STEPS: Tuple[NormalizationStep, ...] = (
    fix_month,
    fix_day,
    fix_hour,
    fix_minute,
    fix_second,
    fix_frac,
)


def adjust(t: Timestamp, ctx: TimeContext) -> Timestamp:
    """
    Return the valid Timestamp equivalent to `t`, carrying any out-of-range
    field into its neighbours, e.g. 02:02:59 plus one second (02:02:60 in a
    normal minute) becomes 02:03:00, and 2013-12-31 23:59:60 becomes
    2014-01-01 00:00:00.

    Any amount may be added to or subtracted from any field beforehand.
    A year outside [epoch year, 9999] is left as is; check is_valid().
    """
    if is_valid(t, ctx):
        return t
    for step in NORMALIZATION_STEPS:
        t = step(t, ctx)
    return t
