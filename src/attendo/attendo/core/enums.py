from __future__ import annotations

from enum import Enum


class RecordKind(str, Enum):
    """The four kinds of punch event, derived from is_entry and break_type_id."""

    ENTRY = "ENTRY"
    EXIT = "EXIT"
    BREAK_START = "BREAK_START"
    BREAK_RETURN = "BREAK_RETURN"


class AttendanceStateKind(str, Enum):
    """Discriminator of AttendanceState."""

    UNKNOWN = "UNKNOWN"
    CHECKED_IN = "CHECKED_IN"
    CHECKED_OUT = "CHECKED_OUT"
    ON_BREAK = "ON_BREAK"
    FAULTED = "FAULTED"


class ActionType(str, Enum):
    """Action filter of the record list screens."""

    ALL = "ALL"
    ENTRY = "ENTRY"
    EXIT = "EXIT"
    BREAK = "BREAK"


class PunchAction(str, Enum):
    """Actions a worker can take from the live dashboard."""

    CHECK_IN = "CHECK_IN"
    CHECK_OUT = "CHECK_OUT"
    START_BREAK = "START_BREAK"
    END_BREAK = "END_BREAK"


class ManualAction(str, Enum):
    """Record type chosen by an administrator on the manual entry screen.

    A break return is entered as ENTRY; the validator attaches the open break.
    """

    ENTRY = "ENTRY"
    EXIT = "EXIT"
    BREAK_START = "BREAK_START"


class ManualRecordError(str, Enum):
    EMPTY_WORKER = "EMPTY_WORKER"
    MISSING_BREAK_TYPE = "MISSING_BREAK_TYPE"
    INVALID_TIMESTAMP = "INVALID_TIMESTAMP"
