from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import mysql.connector
import pytest
from mysql.connector import errorcode

from shift_attendance.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from shift_attendance.core.enums import AttendanceStatus
from shift_attendance.core.exceptions import AlreadyClockedIn, StorageUnavailable


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn
        self.lastrowid = 41
        self.rowcount = conn.rowcount

    def execute(self, sql, params=None):
        self._conn.executed.append((" ".join(sql.split()), params))
        if self._conn.error is not None:
            raise self._conn.error

    def fetchone(self):
        return self._conn.rows[0] if self._conn.rows else None

    def fetchall(self):
        return list(self._conn.rows)

    def close(self):
        pass


class FakeConnection:
    def __init__(self, *, rows=(), error=None, rowcount=1):
        self.rows = list(rows)
        self.error = error
        self.rowcount = rowcount
        self.executed: list = []
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return FakeCursor(self)

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnFactory:
    def __init__(self, conn: FakeConnection):
        self.conn = conn

    def connect(self, *, with_database: bool = True):
        return self.conn


def _row(**overrides):
    row = {
        "attendance_id": 7,
        "employee_id": "e1",
        "work_date": date(2026, 6, 1),
        "clock_in_time": datetime(2026, 6, 1, 9, 30),
        "clock_out_time": datetime(2026, 6, 1, 19),
        "working_hours": Decimal("9.5"),
        "status": "late",
        "is_late": 1,
        "is_auto_clocked_out": 1,
        "location": None,
        "notes": None,
        "version": 2,
    }
    row.update(overrides)
    return row


def test_rows_map_to_records():
    repo = MySQLAttendanceRepository(FakeConnFactory(FakeConnection(rows=[_row()])))

    record = repo.get_for_employee_and_date("e1", date(2026, 6, 1))

    assert record.working_hours == 9.5
    assert record.status == AttendanceStatus.LATE
    assert record.is_late is True
    assert record.is_auto_clocked_out is True
    assert record.version == 2


def test_duplicate_key_becomes_already_clocked_in():
    error = mysql.connector.IntegrityError(msg="Duplicate entry", errno=errorcode.ER_DUP_ENTRY)
    conn = FakeConnection(error=error)
    repo = MySQLAttendanceRepository(FakeConnFactory(conn))

    with pytest.raises(AlreadyClockedIn):
        repo.create_clock_in(
            employee_id="e1",
            work_date=date(2026, 6, 1),
            clock_in_time=datetime(2026, 6, 1, 9),
            status=AttendanceStatus.PRESENT,
            is_late=False,
        )
    assert conn.rolled_back is True
    assert conn.closed is True


def test_driver_errors_become_storage_unavailable():
    error = mysql.connector.OperationalError(msg="Lost connection", errno=2013)
    repo = MySQLAttendanceRepository(FakeConnFactory(FakeConnection(error=error)))

    with pytest.raises(StorageUnavailable):
        repo.list_range(start=date(2026, 6, 1), end=date(2026, 6, 30))


def test_close_record_is_conditional_on_open_state_and_version():
    conn = FakeConnection(rowcount=0)
    repo = MySQLAttendanceRepository(FakeConnFactory(conn))

    written = repo.close_record(
        attendance_id=7,
        expected_version=1,
        clock_out_time=datetime(2026, 6, 1, 19),
        working_hours=10.0,
        status=AttendanceStatus.PRESENT,
        is_auto_clocked_out=True,
    )

    sql, params = conn.executed[0]
    assert written is False
    assert "clock_out_time IS NULL AND version=%s" in sql
    assert params[-2:] == (7, 1)
    assert conn.committed is True


def test_create_clock_in_returns_open_record():
    repo = MySQLAttendanceRepository(FakeConnFactory(FakeConnection()))

    record = repo.create_clock_in(
        employee_id="e1",
        work_date=date(2026, 6, 1),
        clock_in_time=datetime(2026, 6, 1, 9),
        status=AttendanceStatus.PRESENT,
        is_late=False,
        location="HQ",
    )

    assert record.attendance_id == 41
    assert record.is_open
    assert record.location == "HQ"
