from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_record_store import MySQLRecordStore
from .attendance.repository import RecordStore
from .attendance.service import AttendanceService
from .breaktypes.mysql_break_type_repository import MySQLBreakTypeRepository
from .breaktypes.repository import BreakTypeRepository
from .breaktypes.service import BreakTypeService
from .core.constants import DEFAULT_RECORD_LIMIT
from .database.connection import DatabaseConnection, DBConfig


@dataclass(frozen=True)
class Container:
    records_store: RecordStore
    break_types_repo: BreakTypeRepository

    attendance_service: AttendanceService
    break_type_service: BreakTypeService

    default_record_limit: int = DEFAULT_RECORD_LIMIT
    conn: Optional[DatabaseConnection] = None


def wire_services(
    records_store: RecordStore,
    break_types_repo: BreakTypeRepository,
    *,
    default_record_limit: int = DEFAULT_RECORD_LIMIT,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build the services once around already constructed stores."""
    return Container(
        records_store=records_store,
        break_types_repo=break_types_repo,
        attendance_service=AttendanceService(records_store, break_types_repo),
        break_type_service=BreakTypeService(break_types_repo),
        default_record_limit=int(default_record_limit),
        conn=conn,
    )


def build_container(*, db_config: dict, default_record_limit: int = DEFAULT_RECORD_LIMIT) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    return wire_services(
        MySQLRecordStore(conn),
        MySQLBreakTypeRepository(conn),
        default_record_limit=default_record_limit,
        conn=conn,
    )
