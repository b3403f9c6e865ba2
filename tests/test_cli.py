# tests/test_cli.py

import pytest

from leapcal.cli import main


def _run(capsys, *argv):
    rc = main(list(argv))
    return rc, capsys.readouterr()


def test_info(capsys, leap_file):
    rc, out = _run(capsys, "info", "--epoch-year", "1990", "--leap-file", str(leap_file))
    assert rc == 0
    assert "Epoch        : 1990/01/01 00:00:00" in out.out
    assert "Leap seconds : 12" in out.out
    assert "2016/12/31 23:59:60" in out.out


def test_leaps(capsys, leap_file):
    rc, out = _run(capsys, "leaps", "--epoch-year", "1990", "--leap-file", str(leap_file))
    assert rc == 0
    lines = out.out.strip().splitlines()
    assert len(lines) == 13
    assert "1990/12/31 23:59:60" in lines[1]
    assert lines[1].split()[-1] == "31536000"


def test_to_and_from_epoch(capsys, leap_file):
    ctx_args = ("--epoch-year", "1990", "--leap-file", str(leap_file))
    rc, out = _run(capsys, "to-epoch", "1990-12-31 23:59:60", *ctx_args)
    assert rc == 0
    assert out.out.strip() == "31536000"

    rc, out = _run(capsys, "from-epoch", "31536000", "--sep", "-", *ctx_args)
    assert rc == 0
    assert out.out.strip() == "1990-12-31 23:59:60"


def test_to_epoch_rejects_invalid_timestamp(capsys, leap_file):
    rc, out = _run(capsys, "to-epoch", "2013-12-31 23:59:60", "--epoch-year", "1990", "--leap-file", str(leap_file))
    assert rc == 2
    assert "Invalid timestamp" in out.err


def test_adjust(capsys, leap_file):
    ctx_args = ("--epoch-year", "1990", "--leap-file", str(leap_file))
    rc, out = _run(capsys, "adjust", "2012-06-30 23:59:59", "--seconds", "1", *ctx_args)
    assert rc == 0
    assert out.out.strip() == "2012/06/30 23:59:60"

    rc, out = _run(capsys, "adjust", "2012-03-05 14:30:00", "--seconds", "200", *ctx_args)
    assert out.out.strip() == "2012/03/05 14:33:20"


def test_met_and_utc(capsys, leap_file):
    ctx_args = ("--epoch-year", "1990", "--leap-file", str(leap_file))
    rc, out = _run(capsys, "met", "2012-07-01 00:00:01", "--start", "2012-06-30 23:59:59", "--integral", *ctx_args)
    assert rc == 0
    assert out.out.strip() == "3"

    rc, out = _run(capsys, "utc", "1", "--start", "2012-06-30 23:59:59", *ctx_args)
    assert rc == 0
    assert out.out.strip() == "2012/06/30 23:59:60"


def test_missing_leap_file_falls_back(capsys, tmp_path):
    rc, out = _run(capsys, "info", "--epoch-year", "1990", "--leap-file", str(tmp_path / "missing.list"))
    assert rc == 0
    assert "ERROR:" in out.err
    assert "Leap seconds : 0" in out.out


def test_bad_timestamp_exits(leap_file):
    with pytest.raises(SystemExit):
        main(["to-epoch", "yesterday", "--leap-file", str(leap_file)])


def test_round_trip_diagnostic(capsys, leap_file):
    rc, out = _run(
        capsys, "diag", "round-trip",
        "--epoch-year", "1990", "--leap-file", str(leap_file),
        "--end-year", "2020", "--step", "7776007", "--window", "5", "--N", "200",
    )
    assert rc == 0
    assert "All round-trip tests passed." in out.out
