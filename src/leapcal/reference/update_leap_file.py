#!/usr/bin/env python3
from __future__ import annotations

import argparse
import urllib.request
from pathlib import Path
from typing import List, Optional

from .leapfile import LEAP_FILE_ENV, build_context, parse_leap_value, user_cache_path


LEAP_SECONDS_URL = "https://data.iana.org/time-zones/data/leap-seconds.list"


def _fetch(url: str) -> str:
    with urllib.request.urlopen(url) as r:
        return r.read().decode("ascii", errors="replace")


def data_lines(text: str) -> List[str]:
    """Same filtering as leapfile.iter_data_lines, on in-memory text."""
    out = []
    for ln in text.splitlines():
        ln = ln.strip()
        if ln and not ln.startswith("#"):
            out.append(ln)
    return out


def check_leap_text(text: str) -> int:
    """
    Sanity-check a downloaded list; returns the number of leap seconds it
    yields against the 1900 epoch.
    """
    lines = data_lines(text)
    values = [parse_leap_value(ln) for ln in lines]
    if not values or any(v is None for v in values):
        raise RuntimeError("leap-seconds.list has no data lines or a malformed one")
    for a, b in zip(values, values[1:]):
        if not b > a:
            raise RuntimeError(f"leap-seconds.list values are not increasing ({a} then {b})")
    return len(build_context(1900, lines).leap_instants)


def default_output_path() -> Path:
    out = user_cache_path()
    out.parent.mkdir(parents=True, exist_ok=True)
    return out


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Download the current IETF/IERS leap-seconds.list for leapcal.")
    p.add_argument("--url", default=LEAP_SECONDS_URL, help="Source URL")
    p.add_argument("--out", default=None, help="Output path (default: ~/.cache/leapcal/leap-seconds.list)")
    p.add_argument("--also-write-package", action="store_true",
                   help="Also overwrite src/leapcal/reference/data/leap-seconds.list (for repo maintenance).")
    args = p.parse_args(argv)

    print(f"Downloading {args.url} ...")
    text = _fetch(args.url)

    n = check_leap_text(text)
    print(f"Parsed {n} leap-second entries.")

    out = Path(args.out) if args.out else default_output_path()
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text, encoding="ascii")
    print(f"Wrote: {out}")

    if args.also_write_package:
        pkg = Path(__file__).resolve().parent / "data" / "leap-seconds.list"
        pkg.write_text(text, encoding="ascii")
        print(f"Also wrote package snapshot: {pkg}")

    print("\nleapcal picks up the user cache automatically. To pin another file, set:")
    print(f'  export {LEAP_FILE_ENV}="{out}"')
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
