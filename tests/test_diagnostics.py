# tests/test_diagnostics.py

import random

import pytest

from leapcal.core.epoch import to_epoch
from leapcal.core.normalize import is_valid
from leapcal.core.types import Timestamp
from leapcal.diagnostics.round_trip import (
    offset_round_trip,
    offsets_to_check,
    random_timestamp,
    timestamp_round_trip,
)


def test_offsets_cover_leap_windows(ctx1990):
    offsets = set(offsets_to_check(ctx1990, 1990, 2020, 10**9, 2))
    for delta in ctx1990.leap_deltas:
        assert {delta - 2, delta - 1, delta, delta + 1, delta + 2} <= offsets
    assert min(offsets) == 0
    assert max(offsets) < to_epoch(Timestamp(2021), ctx1990)


def test_random_timestamps_are_valid(ctx1990):
    random.seed(2)
    for _ in range(500):
        assert is_valid(random_timestamp(ctx1990, 1990, 2020), ctx1990)


def test_round_trips_pass(ctx1990):
    assert offset_round_trip(ctx1990, offsets_to_check(ctx1990, 1990, 2020, 999_983, 30), max_failures=1) == 0
    random.seed(4)
    samples = [random_timestamp(ctx1990, 1990, 2020) for _ in range(300)] + list(ctx1990.leap_instants)
    assert timestamp_round_trip(ctx1990, samples, max_failures=1) == 0


def test_round_trip_reports_failures(ctx1990, capsys):
    # 2013 had no leap second, so this reading never round-trips
    bogus = [Timestamp(2013, 12, 31, 23, 59, 60), Timestamp(2014, 12, 31, 23, 59, 60)]
    assert timestamp_round_trip(ctx1990, bogus, max_failures=1) == 1
    assert "FAIL" in capsys.readouterr().out


def test_plot_leaps(tmp_path, leap_file):
    pytest.importorskip("numpy")
    matplotlib = pytest.importorskip("matplotlib")
    matplotlib.use("Agg")
    from leapcal.diagnostics.plot_leaps import main

    out = tmp_path / "leaps.png"
    assert main(["--epoch-year", "1990", "--leap-file", str(leap_file), "--start", "1995-01-01",
                 "--y1", "2020", "--out", str(out)]) == 0
    assert out.is_file()
