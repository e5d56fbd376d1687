from __future__ import annotations

from dataclasses import replace
from typing import Optional

import pytest

from src.attendo.attendo.attendance.model import BreakType
from src.attendo.attendo.breaktypes.service import BreakTypeService
from src.attendo.attendo.core.exceptions import ValidationError


class FakeBreakTypesRepo:
    def __init__(self):
        self._items: dict[int, BreakType] = {}
        self._next_id = 1

    def list_active(self):
        return [bt for bt in self._items.values() if bt.is_active]

    def list_all(self):
        return list(self._items.values())

    def get_by_id(self, break_id: int) -> Optional[BreakType]:
        return self._items.get(int(break_id))

    def create(self, *, description, computes_as_work_time):
        bid = self._next_id
        self._next_id += 1
        self._items[bid] = BreakType(break_id=bid, description=description, computes_as_work_time=computes_as_work_time)
        return bid

    def update(self, *, break_id, description, computes_as_work_time):
        self._items[break_id] = replace(
            self._items[break_id],
            description=description,
            computes_as_work_time=computes_as_work_time,
        )
        return True

    def set_active(self, *, break_id, is_active):
        self._items[break_id] = replace(self._items[break_id], is_active=is_active)
        return True


def test_create_trims_description():
    repo = FakeBreakTypesRepo()
    svc = BreakTypeService(repo)

    bid = svc.create(description="  Lunch ", computes_as_work_time=True)

    assert repo.get_by_id(bid) == BreakType(break_id=bid, description="Lunch", computes_as_work_time=True)


def test_create_requires_description():
    svc = BreakTypeService(FakeBreakTypesRepo())

    with pytest.raises(ValidationError):
        svc.create(description="   ")


def test_deactivation_is_soft():
    repo = FakeBreakTypesRepo()
    svc = BreakTypeService(repo)
    bid = svc.create(description="Coffee")

    svc.set_active(break_id=bid, is_active=False)

    assert svc.list_active() == []
    assert [bt.break_id for bt in svc.list_all()] == [bid]
    assert svc.describe(bid) == "Coffee"


def test_update_unknown_break_type_fails():
    svc = BreakTypeService(FakeBreakTypesRepo())

    with pytest.raises(ValidationError):
        svc.update(break_id=99, description="X", computes_as_work_time=False)


def test_update_changes_description():
    repo = FakeBreakTypesRepo()
    svc = BreakTypeService(repo)
    bid = svc.create(description="Cofee")

    svc.update(break_id=bid, description="Coffee", computes_as_work_time=False)

    assert svc.describe(bid) == "Coffee"


def test_describe_unknown_falls_back_to_id():
    assert BreakTypeService(FakeBreakTypesRepo()).describe(7) == "Break 7"
