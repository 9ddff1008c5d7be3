from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import TransientIOError
from .connection import DatabaseConnection

_TRANSIENT_ERRORS = (mysql.connector.errors.OperationalError, mysql.connector.errors.InterfaceError)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)`` inside one transaction.

    Commits on success, rolls back on any exception. Connectivity failures and
    timeouts surface as ``TransientIOError``.
    """

    try:
        conn = conn_factory.connect()
    except _TRANSIENT_ERRORS as e:
        raise TransientIOError("Database unavailable") from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except _TRANSIENT_ERRORS as e:
        _safe_rollback(conn)
        raise TransientIOError("Database operation failed") from e
    except Exception:
        _safe_rollback(conn)
        raise
    finally:
        conn.close()


def _safe_rollback(conn) -> None:
    try:
        conn.rollback()
    except _TRANSIENT_ERRORS:
        # Connection is gone; the server discards the open transaction.
        pass


def is_duplicate_key(error: mysql.connector.Error) -> bool:
    return getattr(error, "errno", None) == errorcode.ER_DUP_ENTRY


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def decode_json_column(value: Any) -> Any:
    """Decode a JSON column value.

    mysql-connector can return JSON as:
    - str
    - bytes / bytearray
    - already-decoded Python objects
    """

    if value is None:
        return None
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        return json.loads(value)
    return value
