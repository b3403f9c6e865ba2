"""leapcal public API.

Leap-second-aware civil UTC timestamps and mission elapsed time.
Most users need init(), Timestamp, adjust() and MissionClock.
"""

from .api import (
    init,
    reset,
    is_initialized,
    get_context,
    set_context,
    is_valid,
    adjust,
    to_epoch,
    to_epoch_frac,
    from_epoch_offset,
    difference,
    is_leap_minute,
    epoch,
)
from .core.calendar import is_leap_year, days_in_month
from .core.context import TimeContext
from .core.errors import LeapcalError, LeapFileError, UninitializedWarning
from .core.format import to_string, date_to_string, time_to_string, parse_timestamp
from .core.types import Timestamp
from .met import MissionClock
from .reference.leapfile import build_context, load_context, find_leap_file

__all__ = [
    "init",
    "reset",
    "is_initialized",
    "get_context",
    "set_context",
    "is_valid",
    "adjust",
    "to_epoch",
    "to_epoch_frac",
    "from_epoch_offset",
    "difference",
    "is_leap_minute",
    "epoch",
    "is_leap_year",
    "days_in_month",
    "TimeContext",
    "LeapcalError",
    "LeapFileError",
    "UninitializedWarning",
    "to_string",
    "date_to_string",
    "time_to_string",
    "parse_timestamp",
    "Timestamp",
    "MissionClock",
    "build_context",
    "load_context",
    "find_leap_file",
]
