from __future__ import annotations

import argparse
import importlib
import inspect
import sys

from .core.calendar import DEFAULT_EPOCH_YEAR
from .core.context import TimeContext
from .core.errors import LeapFileError
from .core.format import parse_timestamp


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def _add_context_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--epoch-year", type=int, default=DEFAULT_EPOCH_YEAR, help=f"Epoch year (default: {DEFAULT_EPOCH_YEAR})")
    p.add_argument("--leap-file", default=None, help="leap-seconds.list (default: LEAPCAL_LEAP_FILE, user cache, packaged)")


def _context(args: argparse.Namespace) -> TimeContext:
    from .reference.leapfile import find_leap_file, load_context

    try:
        return load_context(args.epoch_year, args.leap_file or find_leap_file())
    except LeapFileError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        print(f"WARN: continuing without leap seconds, epoch {args.epoch_year}.", file=sys.stderr)
        return TimeContext(epoch_year=args.epoch_year, initialized=False)


def _parse_ts(s: str):
    try:
        return parse_timestamp(s)
    except ValueError as e:
        raise SystemExit(str(e))


def cmd_info(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="leapcal info", description="Show the epoch and leap-second table in use.")
    _add_context_args(p)
    args = p.parse_args(argv)

    ctx = _context(args)
    print(f"Epoch        : {ctx.epoch}")
    print(f"Leap file    : {ctx.source}")
    print(f"Leap seconds : {len(ctx.leap_instants)}")
    if ctx.leap_instants:
        print(f"Latest       : {ctx.leap_instants[-1]}")
    return 0


def cmd_leaps(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="leapcal leaps", description="List leap seconds after the epoch.")
    _add_context_args(p)
    args = p.parse_args(argv)

    ctx = _context(args)
    print(f"{'#':>3}  {'leap second (UTC)':<21}  seconds since {ctx.epoch_year}")
    for i, (t, d) in enumerate(zip(ctx.leap_instants, ctx.leap_deltas), start=1):
        print(f"{i:>3}  {str(t):<21}  {d}")
    return 0


def cmd_to_epoch(argv: list[str]) -> int:
    from .core.epoch import to_epoch_frac
    from .core.normalize import is_valid

    p = argparse.ArgumentParser(prog="leapcal to-epoch", description="Timestamp -> seconds since epoch (leap-aware).")
    p.add_argument("timestamp", help="YYYY-MM-DD[ HH:MM:SS[.fff]]")
    _add_context_args(p)
    args = p.parse_args(argv)

    ctx = _context(args)
    t = _parse_ts(args.timestamp)
    if not is_valid(t, ctx):
        print(f"Invalid timestamp under epoch {ctx.epoch_year}: {t}", file=sys.stderr)
        return 2
    whole, frac = to_epoch_frac(t, ctx)
    print(whole + frac if frac else whole)
    return 0


def cmd_from_epoch(argv: list[str]) -> int:
    from .core.epoch import from_epoch_offset

    p = argparse.ArgumentParser(prog="leapcal from-epoch", description="Seconds since epoch -> Timestamp.")
    p.add_argument("seconds", type=int)
    p.add_argument("--frac", type=float, default=0.0, help="Fractional seconds")
    p.add_argument("--sep", default="/", help="Date separator")
    _add_context_args(p)
    args = p.parse_args(argv)

    from .core.format import to_string
    print(to_string(from_epoch_offset(args.seconds, _context(args), args.frac), args.sep))
    return 0


def cmd_adjust(argv: list[str]) -> int:
    from .core.format import to_string
    from .core.normalize import adjust

    p = argparse.ArgumentParser(prog="leapcal adjust", description="Add raw field deltas to a timestamp and normalize.")
    p.add_argument("timestamp", help="YYYY-MM-DD[ HH:MM:SS[.fff]] (out-of-range fields allowed)")
    for name in ("years", "months", "days", "hours", "minutes", "seconds"):
        p.add_argument(f"--{name}", type=int, default=0)
    p.add_argument("--frac", type=float, default=0.0)
    p.add_argument("--sep", default="/", help="Date separator")
    _add_context_args(p)
    args = p.parse_args(argv)

    ctx = _context(args)
    t = _parse_ts(args.timestamp).shift(
        years=args.years,
        months=args.months,
        days=args.days,
        hours=args.hours,
        minutes=args.minutes,
        seconds=args.seconds,
        frac=args.frac,
    )
    print(to_string(adjust(t, ctx), args.sep))
    return 0


def cmd_met(argv: list[str]) -> int:
    from .met import MissionClock

    p = argparse.ArgumentParser(prog="leapcal met", description="UTC -> mission elapsed time.")
    p.add_argument("timestamp", help="YYYY-MM-DD[ HH:MM:SS[.fff]]")
    p.add_argument("--start", required=True, help="Mission start, YYYY-MM-DD[ HH:MM:SS[.fff]]")
    p.add_argument("--integral", action="store_true", help="Print whole seconds only (floored)")
    _add_context_args(p)
    args = p.parse_args(argv)

    clock = MissionClock.from_timestamp(_parse_ts(args.start), _context(args))
    t = _parse_ts(args.timestamp)
    if args.integral:
        print(clock.to_integral_met(t))
    else:
        print(repr(clock.to_met(t)))
    return 0


def cmd_utc(argv: list[str]) -> int:
    from .core.format import to_string
    from .met import MissionClock

    p = argparse.ArgumentParser(prog="leapcal utc", description="Mission elapsed time -> UTC.")
    p.add_argument("met", type=float, help="Seconds since mission start")
    p.add_argument("--start", required=True, help="Mission start, YYYY-MM-DD[ HH:MM:SS[.fff]]")
    p.add_argument("--sep", default="/", help="Date separator")
    _add_context_args(p)
    args = p.parse_args(argv)

    clock = MissionClock.from_timestamp(_parse_ts(args.start), _context(args))
    print(to_string(clock.to_utc(args.met), args.sep))
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="leapcal", description="Leap-second-aware UTC timestamps and mission elapsed time.")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("info", help="Show the epoch and leap-second table in use")
    sub.add_parser("leaps", help="List leap seconds after the epoch")
    sub.add_parser("to-epoch", help="Timestamp -> seconds since epoch")
    sub.add_parser("from-epoch", help="Seconds since epoch -> Timestamp")
    sub.add_parser("adjust", help="Add raw deltas to a timestamp and normalize")
    sub.add_parser("met", help="UTC -> mission elapsed time")
    sub.add_parser("utc", help="Mission elapsed time -> UTC")
    sub.add_parser("update-leap-file", help="Download the current leap-seconds.list to the user cache")

    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument(
        "tool",
        choices=["round-trip", "plot-leaps"],
        help="Which diagnostic to run",
    )

    args, rest = p.parse_known_args(argv)

    commands = {
        "info": cmd_info,
        "leaps": cmd_leaps,
        "to-epoch": cmd_to_epoch,
        "from-epoch": cmd_from_epoch,
        "adjust": cmd_adjust,
        "met": cmd_met,
        "utc": cmd_utc,
    }
    if args.cmd in commands:
        return commands[args.cmd](rest)

    if args.cmd == "update-leap-file":
        return _run_module_main("leapcal.reference.update_leap_file", rest)

    if args.cmd == "diag":
        tool_map = {
            "round-trip": "leapcal.diagnostics.round_trip",
            "plot-leaps": "leapcal.diagnostics.plot_leaps",
        }
        return _run_module_main(tool_map[args.tool], rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
