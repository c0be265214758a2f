"""Unit tests for date helpers and query window resolution"""

import pytest
from datetime import date, datetime, timedelta, timezone
from rewards_service.api.v1.rewards import resolve_date_window
from rewards_service.domain.exceptions import InvalidInputError
from rewards_service.utils.date_utils import subtract_months, truncate_to_day

NOW = datetime(2024, 3, 31, 14, 30)


def test_truncate_to_day():
    assert truncate_to_day(datetime(2023, 11, 5, 23, 59, 59)) == date(2023, 11, 5)
    assert truncate_to_day(date(2023, 11, 5)) == date(2023, 11, 5)
    assert truncate_to_day(None) is None


def test_subtract_months_clamps_to_month_end():
    """Test March 31 minus one month lands on the last day of February"""
    assert subtract_months(NOW, 1) == datetime(2024, 2, 29, 14, 30)
    assert subtract_months(NOW, 13) == datetime(2023, 2, 28, 14, 30)
    assert subtract_months(date(2024, 1, 15), 1) == date(2023, 12, 15)


def test_window_defaults_end_to_now_and_leaves_start_open():
    start, end = resolve_date_window(None, None, None, None, now=NOW)

    assert start is None
    assert end == NOW


def test_window_from_days():
    start, end = resolve_date_window(None, None, 30, None, now=NOW)

    assert end - start == timedelta(days=30)


def test_window_from_months():
    start, end = resolve_date_window(None, None, None, 1, now=NOW)

    assert start == datetime(2024, 2, 29, 14, 30)


def test_window_days_take_priority_over_months():
    start, _ = resolve_date_window(None, None, 10, 6, now=NOW)

    assert start == NOW - timedelta(days=10)


def test_window_explicit_start_ignores_days_and_months():
    explicit = datetime(2024, 1, 1)

    start, end = resolve_date_window(explicit, None, 10, 6, now=NOW)

    assert start == explicit
    assert end == NOW


def test_window_inverted_range_rejected():
    with pytest.raises(InvalidInputError):
        resolve_date_window(datetime(2024, 2, 1), datetime(2024, 1, 1), None, None)


def test_window_normalizes_aware_datetimes_to_naive_utc():
    start, end = resolve_date_window(
        datetime(2024, 1, 1, 2, 0, tzinfo=timezone(timedelta(hours=2))),
        datetime(2024, 1, 31, 0, 0, tzinfo=timezone.utc),
        None,
        None,
    )

    assert start == datetime(2024, 1, 1, 0, 0)
    assert end == datetime(2024, 1, 31, 0, 0)
    assert start.tzinfo is None
