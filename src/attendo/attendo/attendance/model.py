from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional, Union

from ..core.enums import AttendanceStateKind, ManualAction, ManualRecordError, RecordKind


@dataclass(frozen=True)
class BreakType:
    """Domain entity: a named category of break. Deactivation is soft."""

    break_id: int
    description: str
    computes_as_work_time: bool = False
    is_active: bool = True
    created_at: Optional[str] = None


@dataclass(frozen=True)
class TimeRecord:
    """Domain entity: an immutable punch event.

    ``timestamp`` is kept as the ISO-8601 text the store holds; ordering works
    on that text and parsing happens only where a calendar date is needed.
    """

    worker_id: str
    timestamp: str
    is_entry: bool
    break_type_id: Optional[int] = None
    location: Optional[str] = None
    is_manual: bool = False
    record_id: Optional[str] = None
    created_at: Optional[str] = None

    @property
    def kind(self) -> RecordKind:
        if self.break_type_id is None:
            return RecordKind.ENTRY if self.is_entry else RecordKind.EXIT
        return RecordKind.BREAK_RETURN if self.is_entry else RecordKind.BREAK_START

    @property
    def is_break_start(self) -> bool:
        return not self.is_entry and self.break_type_id is not None


@dataclass(frozen=True)
class AttendanceState:
    """Derived, never stored: the punch status of a worker.

    Switch on ``kind``; ``break_type_id`` is set for ON_BREAK and ``reason``
    for FAULTED.
    """

    kind: AttendanceStateKind
    break_type_id: Optional[int] = None
    reason: Optional[str] = None

    @classmethod
    def unknown(cls) -> "AttendanceState":
        return cls(AttendanceStateKind.UNKNOWN)

    @classmethod
    def checked_in(cls) -> "AttendanceState":
        return cls(AttendanceStateKind.CHECKED_IN)

    @classmethod
    def checked_out(cls) -> "AttendanceState":
        return cls(AttendanceStateKind.CHECKED_OUT)

    @classmethod
    def on_break(cls, break_type_id: int) -> "AttendanceState":
        return cls(AttendanceStateKind.ON_BREAK, break_type_id=break_type_id)

    @classmethod
    def faulted(cls, reason: str) -> "AttendanceState":
        return cls(AttendanceStateKind.FAULTED, reason=reason)

    def to_dict(self) -> dict:
        return {
            "status": self.kind.value,
            "break_type_id": self.break_type_id,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class DraftRecord:
    """A manual record as submitted by an administrator, before validation."""

    worker_id: str
    action: ManualAction
    work_date: Union[date, str, None]
    time_of_day: Union[time, str, None]
    break_type_id: Optional[int] = None
    location: Optional[str] = None


@dataclass(frozen=True)
class ManualRecordResult:
    """Outcome of manual record validation: a record or an error code."""

    record: Optional[TimeRecord] = None
    error: Optional[ManualRecordError] = None

    @classmethod
    def success(cls, record: TimeRecord) -> "ManualRecordResult":
        return cls(record=record)

    @classmethod
    def failure(cls, error: ManualRecordError) -> "ManualRecordResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None
