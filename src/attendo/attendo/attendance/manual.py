from __future__ import annotations

from datetime import date, datetime, time
from typing import Iterable, Optional, Union

from ..common.datetime_utils import format_record_timestamp, parse_iso_date, parse_time_of_day
from ..common.validators import optional_text
from ..core.enums import ManualAction, ManualRecordError
from .breaks import BreakContinuityAdvisor
from .model import BreakType, DraftRecord, ManualRecordResult, TimeRecord


class ManualRecordValidator:
    """Validate and normalize an administrator's manual record.

    Rules run in order and the first failure wins:

    1. the worker must be given (existence is checked by the caller);
    2. a break start needs an active break type;
    3. an entry closes the open break, if any, whatever type the caller sent;
    4. an exit never carries a break type;
    5. date and time must combine into a timestamp.

    Out-of-order backfill is accepted: the timestamp is not compared with the
    worker's history.
    """

    def __init__(self, advisor: Optional[BreakContinuityAdvisor] = None):
        self._advisor = advisor or BreakContinuityAdvisor()

    def validate(
        self,
        draft: DraftRecord,
        most_recent: Optional[TimeRecord],
        active_break_types: Iterable[BreakType],
    ) -> ManualRecordResult:
        worker_id = (draft.worker_id or "").strip()
        if not worker_id:
            return ManualRecordResult.failure(ManualRecordError.EMPTY_WORKER)

        if draft.action == ManualAction.BREAK_START:
            active_ids = {bt.break_id for bt in active_break_types if bt.is_active}
            if draft.break_type_id is None or draft.break_type_id not in active_ids:
                return ManualRecordResult.failure(ManualRecordError.MISSING_BREAK_TYPE)
            is_entry, break_type_id = False, draft.break_type_id
        elif draft.action == ManualAction.ENTRY:
            is_entry, break_type_id = True, self._advisor.last_open_break_type_id(most_recent)
        else:
            is_entry, break_type_id = False, None

        moment = self._combine(draft.work_date, draft.time_of_day)
        if moment is None:
            return ManualRecordResult.failure(ManualRecordError.INVALID_TIMESTAMP)

        return ManualRecordResult.success(
            TimeRecord(
                worker_id=worker_id,
                timestamp=format_record_timestamp(moment),
                is_entry=is_entry,
                break_type_id=break_type_id,
                location=optional_text(draft.location),
                is_manual=True,
            )
        )

    @staticmethod
    def _combine(work_date: Union[date, str, None], time_of_day: Union[time, str, None]) -> Optional[datetime]:
        try:
            if isinstance(work_date, str):
                work_date = parse_iso_date(work_date.strip())
            if isinstance(time_of_day, str):
                time_of_day = parse_time_of_day(time_of_day)
        except ValueError:
            return None
        if isinstance(work_date, datetime):
            work_date = work_date.date()
        if not isinstance(work_date, date) or not isinstance(time_of_day, time):
            return None
        return datetime.combine(work_date, time_of_day)
