from __future__ import annotations

from typing import Optional

from ..common.datetime_utils import parse_record_timestamp
from ..core.exceptions import RecordParseError
from .model import AttendanceState, TimeRecord


def find_malformation(record: TimeRecord) -> Optional[str]:
    """Return why a record cannot be classified, or None when it is well formed."""
    if not isinstance(record.worker_id, str) or not record.worker_id.strip():
        return "record has no worker"
    if not isinstance(record.is_entry, bool):
        return f"record has an unreadable entry flag: {record.is_entry!r}"
    if record.break_type_id is not None and (
        isinstance(record.break_type_id, bool) or not isinstance(record.break_type_id, int)
    ):
        return f"record has an unreadable break type: {record.break_type_id!r}"
    try:
        parse_record_timestamp(record.timestamp)
    except RecordParseError as e:
        return str(e)
    return None


class AttendanceStateResolver:
    """Derive the current punch status from the most recent record."""

    def resolve(self, most_recent: Optional[TimeRecord]) -> AttendanceState:
        # No history reads as checked out; there is no "never clocked in" state.
        if most_recent is None:
            return AttendanceState.checked_out()

        problem = find_malformation(most_recent)
        if problem:
            return AttendanceState.faulted(problem)

        if most_recent.is_entry:
            return AttendanceState.checked_in()
        if most_recent.break_type_id is not None:
            return AttendanceState.on_break(most_recent.break_type_id)
        return AttendanceState.checked_out()
