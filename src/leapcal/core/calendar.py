from __future__ import annotations

from typing import Protocol, Tuple


# ============================================================
# Constants
# ============================================================

DEFAULT_EPOCH_YEAR = 1900
MAX_YEAR = 9999

MONTHS_PER_YEAR = 12
HOURS_PER_DAY = 24
MINUTES_PER_HOUR = 60
TYPICAL_SECONDS_PER_MINUTE = 60
TYPICAL_DAYS_PER_YEAR = 365

SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400
SECONDS_PER_YEAR = TYPICAL_DAYS_PER_YEAR * SECONDS_PER_DAY

# canonical (non-leap) month lengths, January first
MONTH_DAYS: Tuple[int, ...] = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

FEBRUARY = 2


class CalendarDate(Protocol):
    year: int
    month: int
    day: int


# ============================================================
# Leap years and month lengths
# ============================================================

def is_leap_year(year: int) -> bool:
    """
    Gregorian rule: divisible by 4, except centuries not divisible by 400.
    """
    return year % 4 == 0 and (year % 400 == 0 or year % 100 != 0)


def days_in_month(year: int, month: int) -> int:
    """True length of a month (February has 29 days in leap years)."""
    if month == FEBRUARY and is_leap_year(year):
        return MONTH_DAYS[FEBRUARY - 1] + 1
    return MONTH_DAYS[month - 1]


def days_before_month(month: int) -> int:
    """Canonical days in the months before `month`, ignoring leap days."""
    return sum(MONTH_DAYS[: month - 1])


# ============================================================
# Leap-day interval counting
# ============================================================

def leap_days_before(year: int) -> int:
    """
    Closed form count of leap days from year 0 through the end of `year`.
      y//4 + y//400 - y//100
    """
    return year // 4 + year // 400 - year // 100


def leap_days_between_years(start_year: int, end_year: int) -> int:
    """
    Leap days walked through from Jan 1 of `start_year` to Jan 1 of `end_year`.

    An endpoint that is itself a leap year is treated as the year before,
    since its Feb 29 lies after Jan 1.
    """
    y0 = start_year - 1 if is_leap_year(start_year) else start_year
    y1 = end_year - 1 if is_leap_year(end_year) else end_year
    return leap_days_before(y1) - leap_days_before(y0)


def _before_own_leap_day(d: CalendarDate) -> bool:
    return is_leap_year(d.year) and (d.month == 1 or (d.month == FEBRUARY and d.day <= 29))


def leap_days_between(start: CalendarDate, end: CalendarDate) -> int:
    """
    Leap days walked through between two calendar dates (negative if end < start).

    A date in a leap year counts that year's Feb 29 as passed only once it
    is past February.
    """
    y0 = start.year - 1 if _before_own_leap_day(start) else start.year
    y1 = end.year - 1 if _before_own_leap_day(end) else end.year
    return leap_days_before(y1) - leap_days_before(y0)


def seconds_between_epochs(start_year: int, end_year: int) -> int:
    """
    Seconds from Jan 1 00:00:00 of `start_year` to Jan 1 00:00:00 of `end_year`,
    counting leap days but not leap seconds.

    Used to move leap-file values (referenced to 1900) onto another epoch.
    """
    return (end_year - start_year) * SECONDS_PER_YEAR + leap_days_between_years(start_year, end_year) * SECONDS_PER_DAY
