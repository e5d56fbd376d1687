from __future__ import annotations

from datetime import date, time, timedelta, timezone

import pytest

from src.attendo.attendo.attendance.manual import ManualRecordValidator
from src.attendo.attendo.attendance.model import BreakType, DraftRecord, TimeRecord
from src.attendo.attendo.core.enums import ManualAction, ManualRecordError

ACTIVE = {
    BreakType(break_id=2, description="Lunch"),
    BreakType(break_id=5, description="Coffee"),
}

OPEN_BREAK = TimeRecord(worker_id="w-1", timestamp="2025-01-10T12:00:00", is_entry=False, break_type_id=2)
CHECKED_IN = TimeRecord(worker_id="w-1", timestamp="2025-01-10T08:00:00", is_entry=True)


def draft(action, **kwargs):
    values = {
        "worker_id": "w-1",
        "action": action,
        "work_date": date(2025, 1, 10),
        "time_of_day": time(12, 45),
    }
    values.update(kwargs)
    return DraftRecord(**values)


def test_entry_after_open_break_closes_that_break():
    result = ManualRecordValidator().validate(draft(ManualAction.ENTRY, break_type_id=5), OPEN_BREAK, ACTIVE)

    assert result.ok
    assert result.record.is_entry is True
    assert result.record.break_type_id == 2


def test_entry_without_open_break_drops_break_type():
    result = ManualRecordValidator().validate(draft(ManualAction.ENTRY, break_type_id=5), CHECKED_IN, ACTIVE)

    assert result.ok
    assert result.record.break_type_id is None


def test_exit_never_carries_break_type():
    result = ManualRecordValidator().validate(draft(ManualAction.EXIT, break_type_id=2), OPEN_BREAK, ACTIVE)

    assert result.ok
    assert result.record.is_entry is False
    assert result.record.break_type_id is None


def test_break_start_without_break_type_is_rejected():
    result = ManualRecordValidator().validate(draft(ManualAction.BREAK_START), CHECKED_IN, ACTIVE)

    assert not result.ok
    assert result.error == ManualRecordError.MISSING_BREAK_TYPE
    assert result.record is None


@pytest.mark.parametrize("break_type_id", [9, 7])
def test_break_start_with_unknown_or_inactive_type_is_rejected(break_type_id):
    types = ACTIVE | {BreakType(break_id=7, description="Old", is_active=False)}

    result = ManualRecordValidator().validate(draft(ManualAction.BREAK_START, break_type_id=break_type_id), CHECKED_IN, types)

    assert result.error == ManualRecordError.MISSING_BREAK_TYPE


def test_break_start_with_active_type():
    result = ManualRecordValidator().validate(draft(ManualAction.BREAK_START, break_type_id=5), CHECKED_IN, ACTIVE)

    assert result.ok
    assert result.record.is_entry is False
    assert result.record.break_type_id == 5


def test_blank_worker_is_rejected_first():
    result = ManualRecordValidator().validate(
        draft(ManualAction.BREAK_START, worker_id="  ", work_date="nope"),
        None,
        ACTIVE,
    )

    assert result.error == ManualRecordError.EMPTY_WORKER


def test_break_type_is_checked_before_timestamp():
    result = ManualRecordValidator().validate(draft(ManualAction.BREAK_START, time_of_day="25:99"), None, ACTIVE)

    assert result.error == ManualRecordError.MISSING_BREAK_TYPE


@pytest.mark.parametrize(
    "work_date,time_of_day",
    [("2025-02-30", "09:00"), ("10/01/2025", "09:00"), ("2025-01-10", "9h"), (None, time(9, 0)), (date(2025, 1, 10), None)],
)
def test_uncombinable_date_and_time_are_rejected(work_date, time_of_day):
    result = ManualRecordValidator().validate(
        draft(ManualAction.EXIT, work_date=work_date, time_of_day=time_of_day),
        None,
        ACTIVE,
    )

    assert result.error == ManualRecordError.INVALID_TIMESTAMP


def test_output_is_manual_and_normalized():
    result = ManualRecordValidator().validate(
        draft(ManualAction.ENTRY, worker_id=" w-1 ", work_date="2025-01-10", time_of_day="08:05", location="  "),
        None,
        ACTIVE,
    )

    assert result.ok
    assert result.record.worker_id == "w-1"
    assert result.record.timestamp == "2025-01-10T08:05:00"
    assert result.record.is_manual is True
    assert result.record.record_id is None
    assert result.record.location is None


def test_timezone_aware_time_keeps_offset():
    aware = time(8, 5, tzinfo=timezone(timedelta(hours=1)))

    result = ManualRecordValidator().validate(draft(ManualAction.ENTRY, time_of_day=aware), None, ACTIVE)

    assert result.record.timestamp == "2025-01-10T08:05:00+01:00"


def test_backfill_before_latest_record_is_accepted():
    latest = TimeRecord(worker_id="w-1", timestamp="2025-03-01T08:00:00", is_entry=True)

    result = ManualRecordValidator().validate(draft(ManualAction.EXIT, work_date="2025-01-02"), latest, ACTIVE)

    assert result.ok
    assert result.record.timestamp == "2025-01-02T12:45:00"
