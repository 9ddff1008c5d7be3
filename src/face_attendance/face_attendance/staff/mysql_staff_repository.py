from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Staff
from .repository import StaffRepository

_COLUMNS = """
    staff_id, name, email, department, position, created_at,
    (face_descriptor IS NOT NULL) AS has_face
"""


def _to_staff(r: dict) -> Staff:
    return Staff(
        staff_id=str(r["staff_id"]),
        name=r["name"],
        email=r["email"],
        department=r.get("department"),
        position=r.get("position"),
        has_face=bool(r.get("has_face")),
        created_at=r.get("created_at"),
    )


class MySQLStaffRepository(StaffRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, staff_id: str) -> Optional[Staff]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM staff WHERE staff_id=%s", (staff_id,))
            r = fetchone(cur)
            return _to_staff(r) if r else None
