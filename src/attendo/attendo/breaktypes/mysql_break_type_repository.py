from __future__ import annotations

from typing import Optional, Sequence

from ..attendance.model import BreakType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_text_timestamp
from .repository import BreakTypeRepository


def _to_break_type(r: dict) -> BreakType:
    return BreakType(
        break_id=int(r["break_id"]),
        description=str(r["description"]),
        computes_as_work_time=bool(r.get("computes_as")),
        is_active=bool(r.get("is_active")),
        created_at=normalize_mysql_text_timestamp(r.get("created_at")),
    )


class MySQLBreakTypeRepository(BreakTypeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(self) -> Sequence[BreakType]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT break_id, description, computes_as, is_active, created_at
                FROM break_types
                WHERE is_active=1
                ORDER BY description
                """
            )
            return [_to_break_type(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[BreakType]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT break_id, description, computes_as, is_active, created_at
                FROM break_types
                ORDER BY description
                """
            )
            return [_to_break_type(r) for r in fetchall(cur)]

    def get_by_id(self, break_id: int) -> Optional[BreakType]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT break_id, description, computes_as, is_active, created_at
                FROM break_types
                WHERE break_id=%s
                """,
                (int(break_id),),
            )
            r = fetchone(cur)
            return _to_break_type(r) if r else None

    def create(self, *, description: str, computes_as_work_time: bool) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO break_types(description, computes_as) VALUES(%s,%s)",
                (description, int(computes_as_work_time)),
            )
            return int(cur.lastrowid)

    def update(self, *, break_id: int, description: str, computes_as_work_time: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE break_types SET description=%s, computes_as=%s WHERE break_id=%s",
                (description, int(computes_as_work_time), int(break_id)),
            )
            return cur.rowcount >= 0

    def set_active(self, *, break_id: int, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE break_types SET is_active=%s WHERE break_id=%s",
                (int(is_active), int(break_id)),
            )
            return cur.rowcount >= 0
