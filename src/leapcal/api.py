"""
Process-wide default context and convenience wrappers.

Everything in leapcal.core takes a TimeContext explicitly. This module keeps
one default context for callers that prefer the "initialize once, use
everywhere" style:

    import leapcal
    leapcal.init(1990)                      # packaged or configured leap file
    t = leapcal.adjust(leapcal.Timestamp(2012, 3, 5, 14, 30, 200))

init() replaces the default by rebinding a module global. It is not
reentrant: callers that initialize from several threads must serialize those
calls themselves. Reading the default (every other function here) is safe
from any thread, since a TimeContext never changes once built.
"""

from __future__ import annotations

import logging
import warnings
from typing import Tuple

from .core import epoch as _epoch
from .core import normalize as _normalize
from .core.calendar import DEFAULT_EPOCH_YEAR
from .core.context import TimeContext
from .core.errors import LeapFileError, UninitializedWarning
from .core.types import Timestamp
from .reference.leapfile import find_leap_file, load_context

log = logging.getLogger(__name__)

_context: TimeContext = TimeContext()


def set_context(ctx: TimeContext) -> None:
    global _context
    _context = ctx


def get_context() -> TimeContext:
    """The current default context, which may be uninitialized."""
    return _context


def reset() -> None:
    """Back to the uninitialized default (epoch 1900, no leap seconds)."""
    set_context(TimeContext())


def is_initialized() -> bool:
    return _context.initialized


def _ctx(stacklevel: int = 3) -> TimeContext:
    if not _context.initialized:
        warnings.warn(
            "leapcal not initialized! This means no leap second handling "
            f"and default epoch of {DEFAULT_EPOCH_YEAR}. Call leapcal.init() first.",
            UninitializedWarning,
            stacklevel=stacklevel,
        )
    return _context


def init(epoch_year: int = DEFAULT_EPOCH_YEAR, leap_file=None) -> bool:
    """
    Set the epoch to Jan 1 00:00:00 of `epoch_year` and load leap seconds.

    leap_file:
        path to an IETF/IERS leap-seconds.list. None uses find_leap_file()
        (LEAPCAL_LEAP_FILE, user cache, packaged snapshot).

    Returns False, logs an error and keeps the current context if the file
    cannot be read; a bad epoch year raises ValueError.
    """
    path = leap_file if leap_file is not None else find_leap_file()
    try:
        ctx = load_context(epoch_year, path)
    except LeapFileError as e:
        log.error("%s", e)
        return False
    set_context(ctx)
    log.info("leapcal initialized: epoch %d, %d leap seconds from %s", epoch_year, len(ctx.leap_instants), ctx.source)
    return True


# ============================================================
# Wrappers over the default context
# ============================================================

def is_valid(t: Timestamp) -> bool:
    return _normalize.is_valid(t, _ctx())


def adjust(t: Timestamp) -> Timestamp:
    return _normalize.adjust(t, _ctx())


def to_epoch(t: Timestamp) -> int:
    return _epoch.to_epoch(t, _ctx())


def to_epoch_frac(t: Timestamp) -> Tuple[int, float]:
    return _epoch.to_epoch_frac(t, _ctx())


def from_epoch_offset(seconds: int, frac: float = 0.0) -> Timestamp:
    return _epoch.from_epoch_offset(seconds, _ctx(), frac)


def difference(a: Timestamp, b: Timestamp) -> float:
    return _epoch.difference(a, b, _ctx())


def is_leap_minute(t: Timestamp) -> bool:
    return _ctx().is_leap_minute(t)


def epoch() -> Timestamp:
    """The Epoch Reference of the default context."""
    return _ctx().epoch
