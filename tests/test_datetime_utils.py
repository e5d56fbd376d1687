from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from src.attendo.attendo.common.datetime_utils import (
    add_months,
    default_query_range,
    format_record_timestamp,
    parse_record_timestamp,
    record_date,
)
from src.attendo.attendo.core.exceptions import RecordParseError


def test_default_range_is_current_month_through_next_month():
    assert default_query_range(date(2025, 1, 15)) == (date(2025, 1, 1), date(2025, 2, 28))
    assert default_query_range(date(2024, 12, 31)) == (date(2024, 12, 1), date(2025, 1, 31))


def test_supplied_bounds_are_kept():
    assert default_query_range(date(2025, 1, 15), date(2024, 6, 1), date(2024, 6, 30)) == (
        date(2024, 6, 1),
        date(2024, 6, 30),
    )


def test_single_bound_never_crossed_by_default():
    assert default_query_range(date(2025, 1, 15), start=date(2025, 5, 10)) == (date(2025, 5, 10), date(2025, 6, 30))
    assert default_query_range(date(2025, 1, 15), end=date(2024, 11, 20)) == (date(2024, 11, 1), date(2024, 11, 20))


def test_add_months_clamps_day():
    assert add_months(date(2025, 1, 31), 1) == date(2025, 2, 28)
    assert add_months(date(2025, 11, 30), 3) == date(2026, 2, 28)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("2025-01-10T09:30:00", date(2025, 1, 10)),
        ("2025-01-10T23:30:00-05:00", date(2025, 1, 10)),
        ("2025-01-10T09:30:00Z", date(2025, 1, 10)),
        ("2025-01-10 09:30:00", date(2025, 1, 10)),
    ],
)
def test_record_date_reads_date_as_written(text, expected):
    assert record_date(text) == expected


@pytest.mark.parametrize("value", ["", "yesterday", None, 42, datetime(2025, 1, 10, 9)])
def test_unparseable_timestamps_raise(value):
    with pytest.raises(RecordParseError):
        parse_record_timestamp(value)


def test_format_record_timestamp():
    assert format_record_timestamp(datetime(2025, 1, 10, 8, 5)) == "2025-01-10T08:05:00"
    aware = datetime(2025, 1, 10, 8, 5, tzinfo=timezone(timedelta(hours=-3, minutes=-30)))
    assert format_record_timestamp(aware) == "2025-01-10T08:05:00-03:30"
