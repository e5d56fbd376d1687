from __future__ import annotations

import logging
from typing import Sequence

from ..attendance.model import BreakType
from ..common.validators import require_non_empty
from ..core.constants import UNKNOWN_BREAK_LABEL
from ..core.exceptions import ValidationError
from .repository import BreakTypeRepository

logger = logging.getLogger(__name__)


class BreakTypeService:
    def __init__(self, break_types: BreakTypeRepository):
        self._break_types = break_types

    def list_active(self) -> Sequence[BreakType]:
        return self._break_types.list_active()

    def list_all(self) -> Sequence[BreakType]:
        return self._break_types.list_all()

    def describe(self, break_id: int) -> str:
        bt = self._break_types.get_by_id(int(break_id))
        return bt.description if bt else UNKNOWN_BREAK_LABEL.format(break_id=break_id)

    def create(self, *, description: str, computes_as_work_time: bool = False) -> int:
        description = require_non_empty(description, "Description")
        break_id = self._break_types.create(
            description=description,
            computes_as_work_time=bool(computes_as_work_time),
        )
        logger.info("Created break type %s (%s)", break_id, description)
        return break_id

    def update(self, *, break_id: int, description: str, computes_as_work_time: bool) -> None:
        description = require_non_empty(description, "Description")
        if not self._break_types.get_by_id(int(break_id)):
            raise ValidationError("Break type does not exist")

        ok = self._break_types.update(
            break_id=int(break_id),
            description=description,
            computes_as_work_time=bool(computes_as_work_time),
        )
        if not ok:
            raise ValidationError("Updating the break type failed")

    def set_active(self, *, break_id: int, is_active: bool) -> None:
        if not self._break_types.get_by_id(int(break_id)):
            raise ValidationError("Break type does not exist")

        ok = self._break_types.set_active(break_id=int(break_id), is_active=bool(is_active))
        if not ok:
            raise ValidationError("Changing the break type status failed")
        logger.info("Break type %s is_active=%s", break_id, bool(is_active))
