from __future__ import annotations

from datetime import datetime, time

import pytest

from expense_tracker.utils.dates import parse_range_bound
from expense_tracker.utils.periods import INVALID_PERIOD_MESSAGE, VALID_PERIODS, resolve_period

# Wednesday
NOW = datetime(2024, 3, 13, 15, 30, 0)


def test_today_and_yesterday_cover_whole_days():
    today = resolve_period("today", now=NOW)
    assert today.start == datetime(2024, 3, 13)
    assert today.end == datetime.combine(NOW.date(), time.max)

    yesterday = resolve_period("yesterday", now=NOW)
    assert yesterday.start == datetime(2024, 3, 12)
    assert yesterday.end == datetime(2024, 3, 12, 23, 59, 59, 999999)


def test_this_week_starts_on_sunday():
    window = resolve_period("thisWeek", now=NOW)
    assert window.start == datetime(2024, 3, 10)
    assert window.end == NOW

    sunday = datetime(2024, 3, 10, 9, 0)
    assert resolve_period("thisWeek", now=sunday).start == datetime(2024, 3, 10)


def test_month_windows():
    assert resolve_period("thisMonth", now=NOW).start == datetime(2024, 3, 1)

    last = resolve_period("lastMonth", now=NOW)
    assert last.start == datetime(2024, 2, 1)
    assert last.end == datetime(2024, 2, 29, 23, 59, 59, 999999)

    january = resolve_period("lastMonth", now=datetime(2024, 1, 10))
    assert january.start == datetime(2023, 12, 1)
    assert january.end.date() == datetime(2023, 12, 31).date()


@pytest.mark.parametrize("name,days", [("last30Days", 30), ("last90Days", 90)])
def test_rolling_windows(name, days):
    window = resolve_period(name, now=NOW)
    assert (datetime(2024, 3, 13) - window.start).days == days
    assert window.end == NOW


def test_this_year():
    assert resolve_period("thisYear", now=NOW).start == datetime(2024, 1, 1)


def test_unknown_period():
    assert resolve_period("fortnight", now=NOW) is None
    assert resolve_period("ThisMonth", now=NOW) is None
    for name in VALID_PERIODS:
        assert name in INVALID_PERIOD_MESSAGE


def test_range_bounds():
    assert parse_range_bound(None) is None
    assert parse_range_bound("  ") is None
    assert parse_range_bound("2024-02-10") == datetime(2024, 2, 10)
    assert parse_range_bound("2024-02-10", end=True) == datetime(2024, 2, 10, 23, 59, 59, 999999)
    assert parse_range_bound("2024-02-10T12:00:00Z") == datetime(2024, 2, 10, 12)
    assert parse_range_bound("2024-02-10T12:00:00+02:00") == datetime(2024, 2, 10, 10)
    with pytest.raises(ValueError):
        parse_range_bound("10/02/2024")
