from __future__ import annotations

import uuid
from datetime import date, timedelta
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_text_timestamp
from .model import TimeRecord
from .repository import RecordStore

_COLUMNS = "record_id, user_id, time, is_entry, break_type_id, location, is_manual, created_at"


def _to_record(r: dict) -> TimeRecord:
    return TimeRecord(
        record_id=str(r["record_id"]),
        worker_id=str(r["user_id"]),
        timestamp=str(r["time"]),
        is_entry=bool(r["is_entry"]),
        break_type_id=int(r["break_type_id"]) if r.get("break_type_id") is not None else None,
        location=r.get("location"),
        is_manual=bool(r.get("is_manual")),
        created_at=normalize_mysql_text_timestamp(r.get("created_at")),
    )


class MySQLRecordStore(RecordStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def fetch_most_recent(self, worker_id: str) -> Optional[TimeRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_records
                WHERE user_id=%s
                ORDER BY time DESC, created_at DESC
                LIMIT 1
                """,
                (worker_id,),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def fetch_in_range(self, worker_id: str, start_date: date, end_date: date) -> Sequence[TimeRecord]:
        # Text bounds: every ISO timestamp of a day sorts between "D" and "D+1".
        # Rows not starting with an ISO date come back too so they stay visible.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_records
                WHERE user_id=%s
                  AND ((time >= %s AND time < %s) OR time NOT REGEXP '^[0-9]{{4}}-[0-9]{{2}}-[0-9]{{2}}')
                ORDER BY time DESC
                """,
                (worker_id, start_date.isoformat(), (end_date + timedelta(days=1)).isoformat()),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def append(self, record: TimeRecord) -> TimeRecord:
        record_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO time_records(record_id, user_id, time, is_entry, break_type_id, location, is_manual)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    record_id,
                    record.worker_id,
                    record.timestamp,
                    int(record.is_entry),
                    record.break_type_id,
                    record.location,
                    int(record.is_manual),
                ),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM time_records WHERE record_id=%s", (record_id,))
            return _to_record(fetchone(cur))
