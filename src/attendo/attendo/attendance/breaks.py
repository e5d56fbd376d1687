from __future__ import annotations

from typing import Iterable, Optional

from ..core.enums import AttendanceStateKind, PunchAction
from .model import AttendanceState, BreakType, TimeRecord

_ACTIONS_BY_STATE: dict[AttendanceStateKind, tuple[PunchAction, ...]] = {
    AttendanceStateKind.CHECKED_OUT: (PunchAction.CHECK_IN,),
    AttendanceStateKind.CHECKED_IN: (PunchAction.CHECK_OUT, PunchAction.START_BREAK),
    AttendanceStateKind.ON_BREAK: (PunchAction.END_BREAK,),
}


class BreakContinuityAdvisor:
    """Facts about the open break, derived from the most recent record.

    An entry that follows a break start is a break return and must close that
    same break type.
    """

    def is_return_from_break(self, most_recent: Optional[TimeRecord]) -> bool:
        return most_recent is not None and most_recent.is_break_start

    def last_open_break_type_id(self, most_recent: Optional[TimeRecord]) -> Optional[int]:
        if not self.is_return_from_break(most_recent):
            return None
        return most_recent.break_type_id

    def preselect_break_type(
        self,
        most_recent: Optional[TimeRecord],
        break_types: Iterable[BreakType],
    ) -> Optional[BreakType]:
        break_id = self.last_open_break_type_id(most_recent)
        if break_id is None:
            return None
        return next((bt for bt in break_types if bt.break_id == break_id), None)

    def available_actions(self, state: AttendanceState) -> tuple[PunchAction, ...]:
        # UNKNOWN and FAULTED offer nothing; the caller shows the state instead.
        return _ACTIONS_BY_STATE.get(state.kind, ())
