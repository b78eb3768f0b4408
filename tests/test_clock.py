# tests/test_clock.py
from datetime import datetime

import pytest

from delivery_dates.services.delivery.clock import (
    add_calendar_days,
    days_between,
    is_weekend,
    local_date,
    minutes_since_midnight,
    parse_calendar_date,
    parse_cutoff_time,
)
from delivery_dates.services.delivery.errors import InvalidDeliveryDate

from conftest import utc


def test_local_date_uses_shop_timezone():
    instant = utc(2024, 6, 3, 23, 30)
    assert local_date(instant, "UTC") == "2024-06-03"
    assert local_date(instant, "Asia/Tokyo") == "2024-06-04"
    assert local_date(utc(2024, 6, 3, 3, 0), "America/Los_Angeles") == "2024-06-02"


def test_minutes_since_midnight_is_local_wall_clock():
    assert minutes_since_midnight(utc(2024, 6, 3, 23, 30), "Asia/Tokyo") == 8 * 60 + 30
    assert minutes_since_midnight(utc(2024, 6, 3, 3, 0), "America/Los_Angeles") == 20 * 60
    assert minutes_since_midnight(utc(2024, 6, 3, 0, 0), "UTC") == 0
    assert minutes_since_midnight(utc(2024, 6, 3, 23, 59), "UTC") == 1439


def test_naive_instant_is_treated_as_utc():
    assert local_date(datetime(2024, 6, 3, 23, 30), "Asia/Tokyo") == "2024-06-04"


@pytest.mark.parametrize(
    "tz, day, expected",
    [
        # Spring forward
        ("America/New_York", "2024-03-09", "2024-03-10"),
        ("America/New_York", "2024-03-10", "2024-03-11"),
        # Fall back
        ("America/New_York", "2024-11-02", "2024-11-03"),
        ("America/New_York", "2024-11-03", "2024-11-04"),
        ("Europe/London", "2024-03-30", "2024-03-31"),
        ("Europe/London", "2024-03-31", "2024-04-01"),
        ("Australia/Lord_Howe", "2024-04-06", "2024-04-07"),
    ],
)
def test_add_one_day_across_dst_transitions(tz, day, expected):
    assert add_calendar_days(day, 1, tz) == expected


def test_add_calendar_days_long_range_and_boundaries():
    assert add_calendar_days("2024-02-28", 1, "UTC") == "2024-02-29"
    assert add_calendar_days("2023-02-28", 1, "UTC") == "2023-03-01"
    assert add_calendar_days("2024-12-31", 1, "Pacific/Kiritimati") == "2025-01-01"
    assert add_calendar_days("2024-01-01", 366, "America/New_York") == "2025-01-01"
    assert add_calendar_days("2024-06-03", 0, "UTC") == "2024-06-03"


def test_is_weekend():
    assert is_weekend("2024-06-08", "UTC")  # Saturday
    assert is_weekend("2024-06-09", "America/Los_Angeles")  # Sunday
    assert not is_weekend("2024-06-07", "Asia/Tokyo")  # Friday
    assert not is_weekend("2024-06-03", "UTC")  # Monday


@pytest.mark.parametrize("value", ["2024-6-3", "2024-02-30", "", "06-03", "2024/06/03", "2024-06-03T00:00", None])
def test_parse_calendar_date_rejects_malformed(value):
    with pytest.raises(InvalidDeliveryDate):
        parse_calendar_date(value)


def test_days_between():
    assert days_between("2024-06-03", "2024-06-08") == 5
    assert days_between("2024-06-03", "2024-06-01") == -2
    assert days_between("2024-12-30", "2025-01-02") == 3


def test_parse_cutoff_time():
    assert parse_cutoff_time("14:00") == 840
    assert parse_cutoff_time("00:00") == 0
    assert parse_cutoff_time(" 9:05 ") == 545


@pytest.mark.parametrize("value", ["24:00", "1400", "ab:cd", "", "12:60"])
def test_parse_cutoff_time_rejects_bad_input(value):
    with pytest.raises(ValueError):
        parse_cutoff_time(value)
