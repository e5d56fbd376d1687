from __future__ import annotations

import calendar
from datetime import date, datetime, time
from typing import Optional

from ..core.constants import RECORD_TIMESTAMP_FORMAT
from ..core.exceptions import RecordParseError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_time_of_day(value: str) -> time:
    """Parse HH:MM or HH:MM:SS string into time."""
    v = value.strip()
    fmt = "%H:%M:%S" if v.count(":") == 2 else "%H:%M"
    return datetime.strptime(v, fmt).time()


def parse_record_timestamp(value: object) -> datetime:
    """Parse a stored record timestamp.

    Accepts ISO-8601 with or without an offset (``Z`` included). The result
    keeps whatever offset the text carried; nothing is converted to a fixed zone.
    Records store text, so anything else (a datetime included) is malformed.
    """
    if not isinstance(value, str) or not value.strip():
        raise RecordParseError(f"Invalid record timestamp: {value!r}")

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as e:
        raise RecordParseError(f"Invalid record timestamp: {value!r}") from e


def record_date(value: object) -> date:
    """Calendar date of a record timestamp, as written in the timestamp."""
    return parse_record_timestamp(value).date()


def format_record_timestamp(moment: datetime) -> str:
    """Render a timestamp the way records store it (offset appended if aware)."""
    text = moment.strftime(RECORD_TIMESTAMP_FORMAT)
    offset = moment.strftime("%z")
    if offset:
        text += f"{offset[:3]}:{offset[3:]}"
    return text


def now_local() -> datetime:
    """Current local time, offset-aware.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now().astimezone()


def first_day_of_month(day: date) -> date:
    return day.replace(day=1)


def last_day_of_month(day: date) -> date:
    return day.replace(day=calendar.monthrange(day.year, day.month)[1])


def add_months(day: date, months: int) -> date:
    """Shift a date by whole months, clamping the day to the target month."""
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    return day.replace(year=year, month=month, day=min(day.day, calendar.monthrange(year, month)[1]))


def default_query_range(
    today: date,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> tuple[date, date]:
    """Fetch window for a record query.

    Missing bounds default to the first day of the current month and the last
    day of the next month. A defaulted bound never crosses a supplied one.
    """
    lo = start or first_day_of_month(today)
    hi = end or last_day_of_month(add_months(first_day_of_month(today), 1))

    if start is None and lo > hi:
        lo = first_day_of_month(hi)
    if end is None and hi < lo:
        hi = last_day_of_month(add_months(first_day_of_month(lo), 1))
    return lo, hi
