# tests/test_api.py

import warnings

import pytest

import leapcal
from leapcal import api
from leapcal.core.context import TimeContext


def test_uninitialized_default_warns():
    assert not leapcal.is_initialized()
    with pytest.warns(leapcal.UninitializedWarning, match="not initialized"):
        t = leapcal.adjust(leapcal.Timestamp(2012, 3, 5, 14, 30, 200))
    assert t == leapcal.Timestamp(2012, 3, 5, 14, 33, 20)

    with pytest.warns(leapcal.UninitializedWarning):
        assert leapcal.epoch() == leapcal.Timestamp(1900)


def test_uninitialized_default_has_no_leap_seconds():
    with pytest.warns(leapcal.UninitializedWarning):
        assert not leapcal.is_valid(leapcal.Timestamp(2012, 6, 30, 23, 59, 60))
    with pytest.warns(leapcal.UninitializedWarning):
        assert not leapcal.is_leap_minute(leapcal.Timestamp(2012, 6, 30, 23, 59))


def test_init_from_file(leap_file, caplog):
    with caplog.at_level("INFO", logger="leapcal.api"):
        assert leapcal.init(1990, leap_file) is True
    assert "epoch 1990, 12 leap seconds" in caplog.text
    assert leapcal.is_initialized()

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert leapcal.epoch() == leapcal.Timestamp(1990)
        assert leapcal.is_valid(leapcal.Timestamp(2012, 6, 30, 23, 59, 60))
        assert leapcal.is_leap_minute(leapcal.Timestamp(2012, 6, 30, 23, 59))
        assert leapcal.to_epoch(leapcal.Timestamp(1990, 12, 31, 23, 59, 60)) == 31536000
        assert leapcal.to_epoch_frac(leapcal.Timestamp(1990, 1, 1, 0, 0, 1, 0.5)) == (1, 0.5)
        assert leapcal.from_epoch_offset(31536000) == leapcal.Timestamp(1990, 12, 31, 23, 59, 60)
        assert leapcal.from_epoch_offset(31536000, 0.5).frac == 0.5
        assert leapcal.difference(leapcal.Timestamp(2012, 7, 1), leapcal.Timestamp(2012, 6, 30, 23, 59, 59)) == 2.0


def test_init_with_packaged_snapshot(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path))
    monkeypatch.delenv("LEAPCAL_LEAP_FILE", raising=False)
    assert leapcal.init(2000)
    assert len(api.get_context().leap_instants) == 5


def test_failed_init_keeps_previous_context(leap_file, tmp_path, caplog):
    assert leapcal.init(1990, leap_file)
    before = api.get_context()

    with caplog.at_level("ERROR", logger="leapcal.api"):
        assert leapcal.init(2000, tmp_path / "missing.list") is False
    assert "missing.list" in caplog.text
    assert api.get_context() is before


def test_failed_first_init_stays_uninitialized(tmp_path):
    assert leapcal.init(1990, tmp_path / "missing.list") is False
    assert not leapcal.is_initialized()


def test_bad_epoch_year_raises(leap_file):
    with pytest.raises(ValueError):
        leapcal.init(12000, leap_file)


def test_set_context_and_reset(ctx1990):
    api.set_context(ctx1990)
    assert leapcal.get_context() is ctx1990
    leapcal.reset()
    assert leapcal.get_context() == TimeContext()
    assert not leapcal.is_initialized()


def test_public_surface():
    for name in leapcal.__all__:
        assert hasattr(leapcal, name), name
