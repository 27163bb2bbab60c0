from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Tuple

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import StorageUnavailable
from .connection import DatabaseConnection


class DuplicateKeyError(Exception):
    """A unique constraint rejected the write."""


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True) -> Iterator[Tuple[Any, Any]]:
    """Yield ``(conn, cursor)``; commit on success, roll back on any error.

    mysql-connector errors leave this block as StorageUnavailable, except a
    duplicate key which becomes DuplicateKeyError so repositories can map it
    to a domain rejection.
    """

    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.IntegrityError as exc:
        _safe_rollback(conn)
        if exc.errno == errorcode.ER_DUP_ENTRY:
            raise DuplicateKeyError(str(exc)) from exc
        raise StorageUnavailable(f"Attendance database rejected the write: {exc}") from exc
    except mysql.connector.Error as exc:
        _safe_rollback(conn)
        raise StorageUnavailable(f"Attendance database error: {exc}") from exc
    except Exception:
        _safe_rollback(conn)
        raise
    finally:
        conn.close()


def _safe_rollback(conn) -> None:
    try:
        conn.rollback()
    except mysql.connector.Error:
        # Connection already gone; the original error is the one worth raising.
        pass


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
