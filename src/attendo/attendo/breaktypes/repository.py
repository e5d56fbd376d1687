from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..attendance.model import BreakType


class BreakTypeRepository(Protocol):
    def list_active(self) -> Sequence[BreakType]:
        raise NotImplementedError

    def list_all(self) -> Sequence[BreakType]:
        raise NotImplementedError

    def get_by_id(self, break_id: int) -> Optional[BreakType]:
        raise NotImplementedError

    def create(self, *, description: str, computes_as_work_time: bool) -> int:
        raise NotImplementedError

    def update(self, *, break_id: int, description: str, computes_as_work_time: bool) -> bool:
        raise NotImplementedError

    def set_active(self, *, break_id: int, is_active: bool) -> bool:
        """Soft (de)activation; records keep referencing inactive types."""

        raise NotImplementedError
