"""
Mission elapsed time (MET) <-> UTC.

    leapcal.init(1990)
    clock = MissionClock.from_timestamp(Timestamp(2001, 1, 1))
    met = clock.to_integral_met(Timestamp(2012, 7, 12, 10, 51, 18))
    clock.to_utc(met)        # -> 2012/07/12 10:51:18

MET counts every SI second since the mission start, leap seconds included.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from .core.context import TimeContext
from .core.epoch import from_epoch_offset, to_epoch_frac
from .core.types import Timestamp


def _resolve(ctx: Optional[TimeContext]) -> TimeContext:
    if ctx is not None:
        return ctx
    from .api import _ctx
    return _ctx(stacklevel=4)


@dataclass(frozen=True)
class MissionClock:
    """
    Converter anchored on one mission start instant.

    The start is kept as (whole seconds since epoch, fractional seconds)
    under `ctx`; both are computed once at construction.
    """
    ctx: TimeContext
    start_epoch: int
    start_frac: float = 0.0

    @classmethod
    def from_timestamp(cls, start: Timestamp, ctx: Optional[TimeContext] = None) -> MissionClock:
        """ctx=None uses the process-wide default context."""
        ctx = _resolve(ctx)
        whole, frac = to_epoch_frac(start, ctx)
        return cls(ctx, whole, frac)

    @classmethod
    def from_epoch(cls, seconds: int, frac: float = 0.0, ctx: Optional[TimeContext] = None) -> MissionClock:
        """Start given directly as seconds (+ fraction) since the context epoch."""
        return cls(_resolve(ctx), int(seconds), float(frac))

    @property
    def start(self) -> Timestamp:
        return from_epoch_offset(self.start_epoch, self.ctx, self.start_frac)

    # ----------------------------------------------------------
    # UTC -> MET
    # ----------------------------------------------------------

    def to_met(self, t: Timestamp) -> float:
        """Elapsed seconds since the start; negative before it."""
        whole, frac = to_epoch_frac(t, self.ctx)
        return float(whole - self.start_epoch) + (frac - self.start_frac)

    def to_met_split(self, t: Timestamp) -> Tuple[int, float]:
        """
        (whole, frac) with whole = floor(MET) and 0 <= frac < 1, so that
        whole + frac == to_met(t) for negative METs too.
        """
        whole, frac = to_epoch_frac(t, self.ctx)
        dfrac = frac - self.start_frac
        carry = math.floor(dfrac)
        rem = dfrac - carry
        if rem >= 1.0:
            # a tiny negative dfrac rounds up to 1.0 after the subtraction
            carry, rem = carry + 1, 0.0
        return whole - self.start_epoch + carry, rem

    def to_integral_met(self, t: Timestamp) -> int:
        """Whole seconds of MET, floored (the first element of to_met_split)."""
        return self.to_met_split(t)[0]

    # ----------------------------------------------------------
    # MET -> UTC
    # ----------------------------------------------------------

    def to_utc(self, met: float) -> Timestamp:
        whole = math.floor(met)
        return self.to_utc_split(whole, met - whole)

    def to_utc_split(self, whole: int, frac: float = 0.0) -> Timestamp:
        return from_epoch_offset(self.start_epoch + int(whole), self.ctx, self.start_frac + frac)
