from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Iterable, Optional

from ..common.datetime_utils import record_date
from ..core.constants import DEFAULT_RECORD_LIMIT
from ..core.enums import ActionType
from ..core.exceptions import RecordParseError
from .model import TimeRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimeRecordFilter:
    """Query descriptor for a record list. Replace it wholesale to re-query."""

    worker_id: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    action_type: ActionType = ActionType.ALL
    limit: int = DEFAULT_RECORD_LIMIT
    ascending: bool = True


_ACTION_PREDICATES: dict[ActionType, Callable[[TimeRecord], bool]] = {
    ActionType.ALL: lambda r: True,
    ActionType.ENTRY: lambda r: r.is_entry and r.break_type_id is None,
    ActionType.EXIT: lambda r: not r.is_entry and r.break_type_id is None,
    # Both halves of a break.
    ActionType.BREAK: lambda r: r.break_type_id is not None,
}


def _timestamp_key(record: TimeRecord) -> tuple[bool, str]:
    # Non-text timestamps sort ahead of all text ones instead of failing the comparison.
    ts = record.timestamp
    return (True, ts) if isinstance(ts, str) else (False, repr(ts))


class TimeRecordFilterEngine:
    """Select, order and cap the records of a list screen.

    Pure and total: the same filter over the same candidates always yields the
    same list, and nothing here raises.
    """

    def __init__(self, *, default_limit: int = DEFAULT_RECORD_LIMIT):
        self._default_limit = int(default_limit)

    def apply(self, flt: TimeRecordFilter, candidates: Iterable[TimeRecord]) -> list[TimeRecord]:
        matches_action = _ACTION_PREDICATES.get(flt.action_type, _ACTION_PREDICATES[ActionType.ALL])

        selected = [
            r for r in candidates
            if matches_action(r) and self._in_date_range(r, flt.start_date, flt.end_date)
        ]
        selected.sort(key=_timestamp_key, reverse=not flt.ascending)

        return selected[: self._effective_limit(flt.limit)]

    def _effective_limit(self, limit: int) -> int:
        return limit if limit > 0 else self._default_limit

    @staticmethod
    def _in_date_range(record: TimeRecord, start: Optional[date], end: Optional[date]) -> bool:
        if start is None and end is None:
            return True
        try:
            day = record_date(record.timestamp)
        except RecordParseError:
            # Kept so bad data stays visible for correction.
            logger.debug("Keeping record %s with unparseable timestamp %r", record.record_id, record.timestamp)
            return True
        if start is not None and day < start:
            return False
        if end is not None and day > end:
            return False
        return True
