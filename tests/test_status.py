import pandas as pd
import pytest

from groomdash.data.normalize import day_bounds, derive_status

NOW = pd.Timestamp("2024-01-01T12:00:00Z")


@pytest.mark.parametrize(
    "instant, expected",
    [
        ("2024-01-01T00:00:00Z", "today"),
        ("2024-01-01T23:59:59Z", "today"),
        ("2024-01-02T00:00:00Z", "upcoming"),
        ("2024-03-15T09:00:00Z", "upcoming"),
        ("2023-12-31T23:59:59Z", "completed"),
        ("2023-06-01T10:00:00Z", "completed"),
    ],
)
def test_status_relative_to_utc_day(instant: str, expected: str) -> None:
    assert derive_status(pd.Timestamp(instant), NOW, "UTC") == expected


def test_day_start_is_today_and_day_end_is_upcoming() -> None:
    start, end = day_bounds(NOW, "UTC")

    assert start == pd.Timestamp("2024-01-01T00:00:00Z")
    assert end == pd.Timestamp("2024-01-02T00:00:00Z")
    assert derive_status(start, NOW, "UTC") == "today"
    assert derive_status(end, NOW, "UTC") == "upcoming"
    assert derive_status(start - pd.Timedelta(microseconds=1), NOW, "UTC") == "completed"


def test_local_day_uses_configured_timezone() -> None:
    # 02:00 UTC on Jan 2nd is still Jan 1st in New York.
    now = pd.Timestamp("2024-01-02T02:00:00Z")

    start, end = day_bounds(now, "America/New_York")

    assert start == pd.Timestamp("2024-01-01T05:00:00Z")
    assert end == pd.Timestamp("2024-01-02T05:00:00Z")
    assert derive_status(pd.Timestamp("2024-01-01T20:00:00Z"), now, "America/New_York") == "today"
    assert derive_status(pd.Timestamp("2024-01-01T20:00:00Z"), now, "UTC") == "completed"


def test_day_bounds_follow_wall_clock_across_dst_change() -> None:
    now = pd.Timestamp("2024-03-10T15:00:00Z")

    start, end = day_bounds(now, "America/New_York")

    assert start == pd.Timestamp("2024-03-10T05:00:00Z")
    assert end == pd.Timestamp("2024-03-11T04:00:00Z")
    assert end - start == pd.Timedelta(hours=23)


def test_naive_timestamps_are_treated_as_utc() -> None:
    assert derive_status(pd.Timestamp("2024-01-01T08:00:00"), pd.Timestamp("2024-01-01T12:00:00"), "UTC") == "today"
