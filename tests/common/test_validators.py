from datetime import date, datetime, timedelta, timezone

import pytest

from src.face_attendance.face_attendance.common.cooldown import CooldownKeeper
from src.face_attendance.face_attendance.common.datetime_utils import (
    business_date,
    hours_between,
    minutes_since_midnight,
    parse_iso_date,
    parse_iso_datetime,
)
from src.face_attendance.face_attendance.common.images import decode_data_url
from src.face_attendance.face_attendance.common.validators import is_valid_embedding, require_hour, require_non_empty
from src.face_attendance.face_attendance.core.exceptions import ValidationError


def test_require_non_empty_strips():
    assert require_non_empty("  s1 ", "Staff ID") == "s1"
    with pytest.raises(ValidationError, match="Staff ID is required"):
        require_non_empty("   ", "Staff ID")


def test_require_hour_bounds():
    assert require_hour(0, "h") == 0
    assert require_hour("23", "h") == 23
    for bad in (24, -1, 9.5, "x", None):
        with pytest.raises(ValidationError):
            require_hour(bad, "h")


def test_is_valid_embedding():
    assert is_valid_embedding([0] * 128)
    assert is_valid_embedding(tuple([0.5] * 128))
    assert not is_valid_embedding([0] * 127)
    assert not is_valid_embedding([float("inf")] * 128)
    assert not is_valid_embedding(None)
    assert not is_valid_embedding("a" * 128)


def test_time_helpers():
    start = datetime(2026, 1, 5, 9, 15)
    end = datetime(2026, 1, 5, 17, 0)

    assert hours_between(start, end) == 7.75
    assert minutes_since_midnight(datetime(2026, 1, 5, 9, 1, 59)) == 541
    assert business_date(end) == date(2026, 1, 5)
    assert parse_iso_date("2026-01-05") == date(2026, 1, 5)


def test_parse_iso_datetime_returns_naive_local_time():
    assert parse_iso_datetime("2026-01-05T08:00:00") == datetime(2026, 1, 5, 8, 0)

    aware = datetime(2026, 1, 5, 8, 0, tzinfo=timezone.utc)
    expected = aware.astimezone().replace(tzinfo=None)
    assert parse_iso_datetime("2026-01-05T08:00:00Z") == expected
    assert parse_iso_datetime("2026-01-05T08:00:00+00:00").tzinfo is None


def test_decode_data_url():
    assert decode_data_url("data:image/jpeg;base64,aGVsbG8=") == b"hello"
    assert decode_data_url("aGVsbG8=") == b"hello"
    with pytest.raises(ValidationError):
        decode_data_url("data:image/jpeg;base64,***")
    with pytest.raises(ValidationError):
        decode_data_url("")


def test_cooldown_keeper(fixed_now):
    keeper = CooldownKeeper(5)

    assert keeper.try_acquire("s1", fixed_now)
    assert not keeper.try_acquire("s1", fixed_now + timedelta(seconds=4))
    assert keeper.try_acquire("s2", fixed_now)
    assert keeper.try_acquire("s1", fixed_now + timedelta(seconds=5))

    disabled = CooldownKeeper(0)
    assert disabled.try_acquire("s1", fixed_now)
    assert disabled.try_acquire("s1", fixed_now)


def test_cooldown_release_frees_the_key(fixed_now):
    keeper = CooldownKeeper(60)
    keeper.try_acquire("s1", fixed_now)

    keeper.release("s1", fixed_now)

    assert keeper.try_acquire("s1", fixed_now + timedelta(seconds=1))
    # Releasing a stale claim leaves the newer one alone.
    keeper.release("s1", fixed_now)
    assert not keeper.try_acquire("s1", fixed_now + timedelta(seconds=2))
