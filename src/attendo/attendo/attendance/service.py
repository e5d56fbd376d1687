from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Mapping, Optional

from ..breaktypes.repository import BreakTypeRepository
from ..common.datetime_utils import default_query_range, format_record_timestamp, now_local, parse_record_timestamp
from ..common.validators import optional_text, require_non_empty
from ..core.constants import UNKNOWN_BREAK_LABEL
from ..core.enums import AttendanceStateKind, ManualRecordError, PunchAction, RecordKind
from ..core.exceptions import ManualRecordRejected, RecordParseError, StoreError, ValidationError
from .breaks import BreakContinuityAdvisor
from .filters import TimeRecordFilter, TimeRecordFilterEngine
from .manual import ManualRecordValidator
from .model import AttendanceState, BreakType, DraftRecord, TimeRecord
from .repository import RecordStore
from .state import AttendanceStateResolver

logger = logging.getLogger(__name__)

_MANUAL_ERROR_MESSAGES = {
    ManualRecordError.EMPTY_WORKER: "A worker must be selected",
    ManualRecordError.MISSING_BREAK_TYPE: "An active break type must be selected",
    ManualRecordError.INVALID_TIMESTAMP: "Date and time do not form a valid timestamp",
}

_KIND_LABELS = {
    RecordKind.ENTRY: "Entry",
    RecordKind.EXIT: "Exit",
    RecordKind.BREAK_START: "Break start",
    RecordKind.BREAK_RETURN: "Break return",
}


class AttendanceService:
    """Attendance use cases shared by the dashboard, list and manual entry screens."""

    def __init__(
        self,
        records: RecordStore,
        break_types: BreakTypeRepository,
        *,
        resolver: AttendanceStateResolver | None = None,
        advisor: BreakContinuityAdvisor | None = None,
        engine: TimeRecordFilterEngine | None = None,
        validator: ManualRecordValidator | None = None,
    ):
        self._records = records
        self._break_types = break_types
        self._resolver = resolver or AttendanceStateResolver()
        self._advisor = advisor or BreakContinuityAdvisor()
        self._engine = engine or TimeRecordFilterEngine()
        self._validator = validator or ManualRecordValidator(self._advisor)

    def current_state(self, worker_id: str) -> AttendanceState:
        try:
            last = self._records.fetch_most_recent(worker_id)
        except StoreError as e:
            logger.warning("Could not load the last record of worker %s: %s", worker_id, e)
            return AttendanceState.faulted(str(e))
        return self._resolver.resolve(last)

    def dashboard(self, worker_id: str, *, today: date | None = None) -> dict:
        today = today or now_local().date()
        state = self.current_state(worker_id)

        try:
            todays = self._records.fetch_in_range(worker_id, today, today)
        except StoreError as e:
            logger.warning("Could not load today's records of worker %s: %s", worker_id, e)
            state, todays = AttendanceState.faulted(str(e)), []

        open_break = None
        if state.kind == AttendanceStateKind.ON_BREAK:
            open_break = self.describe_break(state.break_type_id)

        flt = TimeRecordFilter(worker_id=worker_id, start_date=today, end_date=today, ascending=False, limit=max(len(todays), 1))
        break_map = self._break_type_map()

        return {
            "state": state.to_dict(),
            "actions": [a.value for a in self._advisor.available_actions(state)],
            "open_break": open_break,
            "today": [self.to_row(r, break_map) for r in self._engine.apply(flt, todays)],
        }

    def punch(
        self,
        worker_id: str,
        action: PunchAction,
        *,
        location: Optional[str] = None,
        break_type_id: Optional[int] = None,
        now: datetime | None = None,
    ) -> TimeRecord:
        worker_id = require_non_empty(worker_id, "Worker")

        last = self._records.fetch_most_recent(worker_id)
        state = self._resolver.resolve(last)
        if state.kind == AttendanceStateKind.FAULTED:
            raise ValidationError(f"Current status cannot be determined: {state.reason}", code=state.kind.value)
        if action not in self._advisor.available_actions(state):
            raise ValidationError(
                f"{action.value} is not possible while {state.kind.value}",
                code="ACTION_NOT_ALLOWED",
            )

        if action == PunchAction.START_BREAK:
            active_ids = {bt.break_id for bt in self._break_types.list_active()}
            if break_type_id is None or int(break_type_id) not in active_ids:
                raise ValidationError(
                    _MANUAL_ERROR_MESSAGES[ManualRecordError.MISSING_BREAK_TYPE],
                    code=ManualRecordError.MISSING_BREAK_TYPE.value,
                )
            break_type_id = int(break_type_id)
        elif action == PunchAction.END_BREAK:
            break_type_id = self._advisor.last_open_break_type_id(last)
        else:
            break_type_id = None

        record = TimeRecord(
            worker_id=worker_id,
            timestamp=format_record_timestamp(now or now_local()),
            is_entry=action in (PunchAction.CHECK_IN, PunchAction.END_BREAK),
            break_type_id=break_type_id,
            location=optional_text(location),
            is_manual=False,
        )
        stored = self._records.append(record)
        logger.info("Worker %s punched %s at %s", worker_id, action.value, stored.timestamp)
        return stored

    def list_records(self, flt: TimeRecordFilter, *, today: date | None = None) -> list[TimeRecord]:
        today = today or now_local().date()
        start, end = default_query_range(today, flt.start_date, flt.end_date)
        candidates = self._records.fetch_in_range(flt.worker_id, start, end)
        return self._engine.apply(flt, candidates)

    def list_records_ui(self, flt: TimeRecordFilter, *, today: date | None = None) -> list[dict]:
        break_map = self._break_type_map()
        return [self.to_row(r, break_map) for r in self.list_records(flt, today=today)]

    def manual_entry_context(self, worker_id: str) -> dict:
        """What the manual entry screen needs once a worker is selected."""
        worker_id = require_non_empty(worker_id, "Worker")
        last = self._records.fetch_most_recent(worker_id)
        active = self._break_types.list_active()
        preselected = self._advisor.preselect_break_type(last, active)

        return {
            "last_record": self.to_row(last) if last else None,
            "is_return_from_break": self._advisor.is_return_from_break(last),
            "open_break_type_id": self._advisor.last_open_break_type_id(last),
            "preselected_break_type": preselected.description if preselected else None,
        }

    def record_manual(self, draft: DraftRecord) -> TimeRecord:
        worker_id = (draft.worker_id or "").strip()
        last = self._records.fetch_most_recent(worker_id) if worker_id else None

        result = self._validator.validate(replace(draft, worker_id=worker_id), last, self._break_types.list_active())
        if not result.ok:
            logger.warning("Manual record for worker %r rejected: %s", worker_id, result.error.value)
            raise ManualRecordRejected(_MANUAL_ERROR_MESSAGES[result.error], code=result.error.value)

        stored = self._records.append(result.record)
        logger.info("Manual %s record stored for worker %s at %s", stored.kind.value, worker_id, stored.timestamp)
        return stored

    def describe_break(self, break_id: Optional[int], break_map: Mapping[int, BreakType] | None = None) -> str:
        if break_map is None:
            break_map = self._break_type_map()
        bt = break_map.get(break_id) if break_id is not None else None
        return bt.description if bt else UNKNOWN_BREAK_LABEL.format(break_id=break_id)

    def to_row(self, record: TimeRecord, break_map: Mapping[int, BreakType] | None = None) -> dict:
        if break_map is None:
            break_map = self._break_type_map()
        kind = record.kind
        label = _KIND_LABELS[kind]
        if record.break_type_id is not None:
            label = f"{label}: {self.describe_break(record.break_type_id, break_map)}"

        try:
            moment = parse_record_timestamp(record.timestamp)
            day, clock = moment.strftime("%Y-%m-%d"), moment.strftime("%H:%M:%S")
        except RecordParseError:
            day, clock = str(record.timestamp), "-"

        return {
            "record_id": record.record_id,
            "worker_id": record.worker_id,
            "timestamp": record.timestamp,
            "date": day,
            "time": clock,
            "kind": kind.value,
            "label": label,
            "break_type_id": record.break_type_id,
            "location": record.location or "-",
            "is_manual": record.is_manual,
        }

    def _break_type_map(self) -> dict[int, BreakType]:
        # Inactive types too: history keeps referencing them.
        return {bt.break_id: bt for bt in self._break_types.list_all()}
