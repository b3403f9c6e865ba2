from __future__ import annotations

import re
from decimal import Decimal

from .types import Timestamp


_TS_RE = re.compile(
    r"^\s*(\d{4})[-/](\d{1,2})[-/](\d{1,2})"
    r"(?:[ T](\d{1,2}):(\d{1,2}):(\d{1,2})(\.\d+)?)?\s*Z?\s*$"
)


def date_to_string(t: Timestamp, sep: str = "/") -> str:
    return f"{t.year:04d}{sep}{t.month:02d}{sep}{t.day:02d}"


def _seconds_text(t: Timestamp) -> str:
    if t.frac == 0.0:
        return f"{t.second:02d}"
    if 0.0 < t.frac < 1.0:
        # apart from the second, so a tiny fraction is never absorbed
        digits = format(Decimal(repr(t.frac)), "f")
        return f"{t.second:02d}{digits[1:]}"
    combined = t.second + t.frac
    text = format(Decimal(repr(combined)), "f")
    return ("0" + text) if 0.0 <= combined < 10.0 else text


def time_to_string(t: Timestamp) -> str:
    """HH:MM:SS, with the shortest exact fraction appended when frac != 0."""
    return f"{t.hour:02d}:{t.minute:02d}:{_seconds_text(t)}"


def to_string(t: Timestamp, sep: str = "/") -> str:
    """e.g. '2012/06/30 23:59:60' or '2012/03/05 14:33:20.25'"""
    return f"{date_to_string(t, sep)} {time_to_string(t)}"


def parse_timestamp(s: str) -> Timestamp:
    """
    Parse 'YYYY-MM-DD[ |T]HH:MM:SS[.fff]' (or with '/' date separators).
    A bare date means midnight. Fields are not range-checked here, so
    '2012-06-30T23:59:60' parses as written.
    """
    m = _TS_RE.match(s)
    if m is None:
        raise ValueError(f"Unrecognized timestamp '{s}'. Expected YYYY-MM-DD[ HH:MM:SS[.fff]]")
    y, mo, d, hh, mi, ss, frac = m.groups()
    return Timestamp(
        int(y),
        int(mo),
        int(d),
        int(hh or 0),
        int(mi or 0),
        int(ss or 0),
        float("0" + frac) if frac else 0.0,
    )
