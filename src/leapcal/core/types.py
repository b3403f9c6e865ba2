from __future__ import annotations

import math
import time
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Tuple


@dataclass(frozen=True, order=True)
class Timestamp:
    """
    Civil UTC calendar instant with an explicit leap-second reading.

    Fields may temporarily sit outside their ranges (e.g. after `shift`);
    `leapcal.core.normalize.adjust` brings them back. Ordering is
    lexicographic over (year, month, day, hour, minute, second, frac).
    """
    year: int
    month: int = 1
    day: int = 1
    hour: int = 0
    minute: int = 0
    second: int = 0
    frac: float = 0.0

    def shift(
        self,
        *,
        years: int = 0,
        months: int = 0,
        days: int = 0,
        hours: int = 0,
        minutes: int = 0,
        seconds: int = 0,
        frac: float = 0.0,
    ) -> Timestamp:
        """Add raw deltas field by field. The result is NOT normalized."""
        return replace(
            self,
            year=self.year + years,
            month=self.month + months,
            day=self.day + days,
            hour=self.hour + hours,
            minute=self.minute + minutes,
            second=self.second + seconds,
            frac=self.frac + frac,
        )

    def minute_key(self) -> Tuple[int, int, int, int, int]:
        return (self.year, self.month, self.day, self.hour, self.minute)

    def key_no_frac(self) -> Tuple[int, int, int, int, int, int]:
        return (self.year, self.month, self.day, self.hour, self.minute, self.second)

    def equals_no_frac(self, other: Timestamp) -> bool:
        return self.key_no_frac() == other.key_no_frac()

    # ----------------------------------------------------------
    # stdlib interop
    # ----------------------------------------------------------

    @classmethod
    def from_datetime(cls, dt: datetime) -> Timestamp:
        """
        Naive datetimes are taken as UTC; aware ones are converted to UTC.
        Microseconds become `frac`.
        """
        if dt.tzinfo is not None:
            dt = dt.astimezone(timezone.utc)
        return cls(dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second, dt.microsecond / 1e6)

    @classmethod
    def from_struct_time(cls, st: time.struct_time, frac: float = 0.0) -> Timestamp:
        return cls(st.tm_year, st.tm_mon, st.tm_mday, st.tm_hour, st.tm_min, st.tm_sec, frac)

    def to_datetime(self) -> datetime:
        """
        Naive UTC datetime (microsecond resolution).
        datetime has no leap-second reading, so a ':60' second is rejected.
        """
        if self.second >= 60:
            raise ValueError(f"datetime cannot represent a leap second: {self}")
        micro = int(math.floor(self.frac * 1e6 + 0.5))
        if micro >= 1_000_000:
            micro = 999_999
        return datetime(self.year, self.month, self.day, self.hour, self.minute, self.second, micro)

    def __str__(self) -> str:
        from .format import to_string
        return to_string(self)
