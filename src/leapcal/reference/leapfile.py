from __future__ import annotations

"""
leapcal.reference.leapfile

Leap-second table ingestion.

The input is the IETF/IERS `leap-seconds.list` (public domain, distributed
via IANA with the tz database). Data lines look like

    3550089600	35	# 1 Jul 2012

and only the leading number is used here: the NTP timestamp (seconds since
1900-01-01 00:00:00, counted Unix-style, i.e. WITHOUT leap seconds) of the
midnight that follows the leap second. Lines starting with '#' are comments.

Note that leapcal epoch seconds DO count leap seconds, so the n-th value
kept from the file is moved by the n-1 leap seconds already passed.

Lookup order for the file when none is given (find_leap_file):
  1) LEAPCAL_LEAP_FILE environment variable
  2) user cache (~/.cache/leapcal/leap-seconds.list or $XDG_CACHE_HOME/leapcal/...)
  3) packaged snapshot (leapcal/reference/data/leap-seconds.list)
"""

import importlib.resources
import logging
import os
import re
from dataclasses import replace
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from ..core.calendar import DEFAULT_EPOCH_YEAR, MAX_YEAR, seconds_between_epochs
from ..core.context import TimeContext
from ..core.epoch import from_epoch_offset
from ..core.errors import LeapFileError
from ..core.types import Timestamp

log = logging.getLogger(__name__)

LEAP_FILE_NAME = "leap-seconds.list"
LEAP_FILE_ENV = "LEAPCAL_LEAP_FILE"

_LEADING_DIGITS = re.compile(r"\d+")


# ---------------------------------------------------------------------------
# Line reader
# ---------------------------------------------------------------------------

def iter_data_lines(path) -> Iterator[str]:
    """
    Yield the non-empty, non-comment lines of an ASCII text file, stripped.

    Any newline convention is accepted and a last line without a trailing
    newline is still returned. `path` may be a str, a Path or an
    importlib.resources Traversable.
    """
    if isinstance(path, str):
        path = Path(path)
    with path.open("r", encoding="ascii", errors="replace", newline=None) as f:
        for raw in f:
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            yield line


def parse_leap_value(line: str) -> Optional[int]:
    """Leading decimal digits of a data line, or None if there are none."""
    m = _LEADING_DIGITS.match(line)
    return int(m.group(0)) if m else None


# ---------------------------------------------------------------------------
# Table builder
# ---------------------------------------------------------------------------

def _check_epoch_year(epoch_year: int) -> None:
    if not (0 <= epoch_year <= MAX_YEAR):
        raise ValueError(f"epoch_year must be in [0, {MAX_YEAR}]: {epoch_year}")


def build_context(epoch_year: int, lines: Iterable[str], *, source: Optional[str] = None) -> TimeContext:
    """
    Build a TimeContext for `epoch_year` from leap-file data lines.

    For every value v past the new epoch (v - epoch shift = d):
      delta   = v - d + k          (k = leap seconds kept so far)
      instant = the ':60' reading at offset `delta`

    The instant is found by resolving the ':59' reading just before it
    against the table built so far, then bumping its second. Leap seconds
    at or before the epoch cannot be represented and are dropped.
    """
    _check_epoch_year(epoch_year)
    shift = seconds_between_epochs(DEFAULT_EPOCH_YEAR, epoch_year)

    instants: List[Timestamp] = []
    deltas: List[int] = []
    for line in lines:
        v = parse_leap_value(line)
        if v is None or v <= shift:
            continue
        delta = v - shift + len(deltas)
        partial = TimeContext(epoch_year, tuple(instants), tuple(deltas), initialized=True)
        reading_59 = from_epoch_offset(delta - 1, partial)
        instants.append(replace(reading_59, second=reading_59.second + 1))
        deltas.append(delta)

    return TimeContext(
        epoch_year=epoch_year,
        leap_instants=tuple(instants),
        leap_deltas=tuple(deltas),
        initialized=True,
        source=source,
    )


def load_context(epoch_year: int, path) -> TimeContext:
    """
    Read a leap-second file and build its context.
    Raises LeapFileError if the file cannot be opened or read.
    """
    _check_epoch_year(epoch_year)
    try:
        lines = list(iter_data_lines(path))
    except OSError as e:
        raise LeapFileError(f"Failed to open leap-second file {path}: {e}") from e
    return build_context(epoch_year, lines, source=str(path))


# ---------------------------------------------------------------------------
# File lookup
# ---------------------------------------------------------------------------

def user_cache_path() -> Path:
    xdg = os.environ.get("XDG_CACHE_HOME", "").strip()
    base = (Path(xdg).expanduser() / "leapcal") if xdg else (Path.home() / ".cache" / "leapcal")
    return base / LEAP_FILE_NAME


def packaged_leap_file():
    """Traversable for the snapshot shipped with the package."""
    return importlib.resources.files("leapcal.reference.data").joinpath(LEAP_FILE_NAME)


def find_leap_file():
    """
    First leap-second file found in lookup order (see module docstring).
    The packaged snapshot is always the last resort.
    """
    p = os.environ.get(LEAP_FILE_ENV, "").strip()
    if p:
        path = Path(p).expanduser()
        if path.is_file():
            return path
        log.warning("%s=%s is not a file; ignoring", LEAP_FILE_ENV, p)

    cached = user_cache_path()
    if cached.is_file():
        return cached

    return packaged_leap_file()
