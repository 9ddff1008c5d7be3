from __future__ import annotations

import json
from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, decode_json_column, fetchall
from .model import StoredFace
from .repository import FaceEmbeddingRepository


class MySQLFaceEmbeddingRepository(FaceEmbeddingRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_registered(self) -> Sequence[StoredFace]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT staff_id, name, face_descriptor
                FROM staff
                WHERE face_descriptor IS NOT NULL
                ORDER BY created_at, staff_id
                """
            )
            rows = fetchall(cur)

        faces = []
        for r in rows:
            try:
                descriptor = decode_json_column(r["face_descriptor"])
            except ValueError:
                # Unparseable JSON is kept as-is so the store can report and skip it.
                descriptor = r["face_descriptor"]
            faces.append(StoredFace(staff_id=str(r["staff_id"]), name=r["name"], descriptor=descriptor))
        return faces

    def save(self, *, staff_id: str, descriptor: Sequence[float], reference_image: Optional[bytes]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT staff_id FROM staff WHERE staff_id=%s FOR UPDATE", (staff_id,))
            if not cur.fetchone():
                return False
            cur.execute(
                """
                UPDATE staff
                SET face_descriptor=%s, face_image=%s, face_registered_at=%s
                WHERE staff_id=%s
                """,
                (json.dumps([float(v) for v in descriptor]), reference_image, datetime.now(), staff_id),
            )
            return True

    def delete(self, *, staff_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE staff
                SET face_descriptor=NULL, face_image=NULL, face_registered_at=NULL
                WHERE staff_id=%s AND face_descriptor IS NOT NULL
                """,
                (staff_id,),
            )
            return cur.rowcount > 0
