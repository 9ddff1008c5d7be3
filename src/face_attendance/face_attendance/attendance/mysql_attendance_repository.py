from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import AttendanceStatus
from ..core.exceptions import ConcurrencyConflict
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, staff_id, staff_name, work_date,
    check_in_time, check_out_time, status, working_hours
"""


def _to_record(r: dict) -> AttendanceRecord:
    hours = r.get("working_hours")
    return AttendanceRecord(
        attendance_id=str(r["attendance_id"]),
        staff_id=str(r["staff_id"]),
        staff_name=r["staff_name"],
        work_date=r["work_date"],
        check_in_time=r.get("check_in_time"),
        check_out_time=r.get("check_out_time"),
        status=AttendanceStatus(r["status"]),
        working_hours=float(hours) if hours is not None else None,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s", (attendance_id,))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_staff_and_date(self, staff_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE staff_id=%s AND work_date=%s
                """,
                (staff_id, work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE work_date=%s
                ORDER BY check_in_time ASC
                """,
                (work_date,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_recent_for_staff(self, staff_id: str, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE staff_id=%s
                ORDER BY work_date DESC
                LIMIT %s
                """,
                (staff_id, int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def create_checkin(
        self,
        *,
        attendance_id: str,
        staff_id: str,
        staff_name: str,
        work_date: date,
        check_in_time: datetime,
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(attendance_id, staff_id, staff_name, work_date, check_in_time, status)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (attendance_id, staff_id, staff_name, work_date, check_in_time, status.value),
                )
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise ConcurrencyConflict(f"Attendance for {staff_id} on {work_date} was created concurrently") from e
            raise

        return AttendanceRecord(
            attendance_id=attendance_id,
            staff_id=staff_id,
            staff_name=staff_name,
            work_date=work_date,
            check_in_time=check_in_time,
            check_out_time=None,
            status=status,
        )

    def claim_checkin(self, *, attendance_id: str, staff_name: str, check_in_time: datetime, status: AttendanceStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_in_time=%s, status=%s, staff_name=%s, working_hours=NULL
                WHERE attendance_id=%s AND check_in_time IS NULL AND check_out_time IS NULL
                """,
                (check_in_time, status.value, staff_name, attendance_id),
            )
            return cur.rowcount > 0

    def close_checkout(self, *, attendance_id: str, check_out_time: datetime, working_hours: Optional[float]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out_time=%s, working_hours=%s
                WHERE attendance_id=%s AND check_out_time IS NULL
                """,
                (check_out_time, working_hours, attendance_id),
            )
            return cur.rowcount > 0

    def admin_update_record(
        self,
        *,
        attendance_id: str,
        check_in_time: Optional[datetime],
        check_out_time: Optional[datetime],
        status: AttendanceStatus,
        working_hours: Optional[float],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_in_time=%s, check_out_time=%s, status=%s, working_hours=%s
                WHERE attendance_id=%s
                """,
                (check_in_time, check_out_time, status.value, working_hours, attendance_id),
            )
            return cur.rowcount > 0
