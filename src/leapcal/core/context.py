from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .calendar import DEFAULT_EPOCH_YEAR, TYPICAL_SECONDS_PER_MINUTE
from .types import Timestamp


@dataclass(frozen=True)
class TimeContext:
    """
    Epoch Reference plus the leap-second table.

    Built once (see leapcal.reference.leapfile.build_context) and read-only
    afterwards, so a context can be shared freely between callers and threads.

    leap_instants:
        one Timestamp per leap second, each with second == 60.
    leap_deltas:
        epoch offset (relative to `epoch_year`) of each leap instant,
        strictly increasing and parallel to `leap_instants`.
    """
    epoch_year: int = DEFAULT_EPOCH_YEAR
    leap_instants: Tuple[Timestamp, ...] = ()
    leap_deltas: Tuple[int, ...] = ()
    initialized: bool = False
    source: Optional[str] = None

    def __post_init__(self) -> None:
        if len(self.leap_instants) != len(self.leap_deltas):
            raise ValueError("leap_instants and leap_deltas must have the same length")

    @property
    def epoch(self) -> Timestamp:
        return Timestamp(self.epoch_year, 1, 1, 0, 0, 0, 0.0)

    # ----------------------------------------------------------
    # Leap minutes
    # ----------------------------------------------------------

    def is_leap_minute(self, t: Timestamp) -> bool:
        key = t.minute_key()
        return any(leap.minute_key() == key for leap in self.leap_instants)

    def seconds_in_minute(self, t: Timestamp) -> int:
        """60, or 61 for a minute holding a leap second."""
        return TYPICAL_SECONDS_PER_MINUTE + 1 if self.is_leap_minute(t) else TYPICAL_SECONDS_PER_MINUTE

    # ----------------------------------------------------------
    # Leap-second interval counting
    # ----------------------------------------------------------

    def leap_seconds_before(self, t: Timestamp) -> int:
        """
        Leap seconds fully elapsed before `t`: instants strictly earlier
        than `t` with fractional seconds ignored (so `t` itself never counts).
        """
        key = t.key_no_frac()
        return sum(1 for leap in self.leap_instants if key > leap.key_no_frac())

    def leap_seconds_between(self, start: int, end: int) -> int:
        """
        Signed count of leap deltas inside the closed interval between two
        raw epoch offsets: positive walking forward, negative walking back.
        """
        if end > start:
            return sum(1 for d in self.leap_deltas if start <= d <= end)
        if end < start:
            return -sum(1 for d in self.leap_deltas if end <= d <= start)
        return 0
