from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, decode_json_column, fetchone
from .model import Setting
from .repository import SettingsRepository


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, key: str) -> Optional[Setting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT setting_key, setting_value, updated_at FROM settings WHERE setting_key=%s",
                (key,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Setting(
                key=r["setting_key"],
                value=decode_json_column(r["setting_value"]),
                updated_at=r.get("updated_at"),
            )

    def upsert(self, *, key: str, value: Any, updated_at: datetime) -> Setting:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO settings(setting_key, setting_value, updated_at)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE setting_value=VALUES(setting_value), updated_at=VALUES(updated_at)
                """,
                (key, json.dumps(value), updated_at),
            )
        return Setting(key=key, value=value, updated_at=updated_at)
