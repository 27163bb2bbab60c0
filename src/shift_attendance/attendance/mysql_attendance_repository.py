from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..core.exceptions import AlreadyClockedIn
from ..database.connection import DatabaseConnection
from ..database.mysql_base import DuplicateKeyError, db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, employee_id, work_date, clock_in_time, clock_out_time, working_hours,
    status, is_late, is_auto_clocked_out, location, notes, version
"""


def _to_record(r: dict) -> AttendanceRecord:
    hours = r.get("working_hours")
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=str(r["employee_id"]),
        work_date=r["work_date"],
        clock_in_time=r["clock_in_time"],
        clock_out_time=r.get("clock_out_time"),
        working_hours=float(hours) if hours is not None else None,
        status=AttendanceStatus(r["status"]),
        is_late=bool(r.get("is_late")),
        is_auto_clocked_out=bool(r.get("is_auto_clocked_out")),
        location=r.get("location"),
        notes=r.get("notes"),
        version=int(r.get("version") or 1),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE employee_id=%s AND work_date=%s",
                (employee_id, work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s",
                (int(attendance_id),),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create_clock_in(
        self,
        *,
        employee_id: str,
        work_date: date,
        clock_in_time: datetime,
        status: AttendanceStatus,
        is_late: bool,
        location: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> AttendanceRecord:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(
                        employee_id, work_date, clock_in_time, status, is_late, location, notes
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (employee_id, work_date, clock_in_time, status.value, int(is_late), location, notes),
                )
                attendance_id = int(cur.lastrowid)
        except DuplicateKeyError:
            raise AlreadyClockedIn() from None

        return AttendanceRecord(
            attendance_id=attendance_id,
            employee_id=employee_id,
            work_date=work_date,
            clock_in_time=clock_in_time,
            clock_out_time=None,
            status=status,
            is_late=is_late,
            location=location,
            notes=notes,
        )

    def close_record(
        self,
        *,
        attendance_id: int,
        expected_version: int,
        clock_out_time: datetime,
        working_hours: float,
        status: AttendanceStatus,
        is_auto_clocked_out: bool,
        notes: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET clock_out_time=%s, working_hours=%s, status=%s, is_auto_clocked_out=%s,
                    notes=COALESCE(%s, notes), version=version + 1
                WHERE attendance_id=%s AND clock_out_time IS NULL AND version=%s
                """,
                (
                    clock_out_time,
                    working_hours,
                    status.value,
                    int(is_auto_clocked_out),
                    notes,
                    int(attendance_id),
                    int(expected_version),
                ),
            )
            return cur.rowcount > 0

    def list_open(self, *, on_or_before: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM attendance_records
                WHERE clock_out_time IS NULL AND work_date <= %s
                ORDER BY work_date, employee_id
                """,
                (on_or_before,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_range(self, *, start: date, end: date, employee_id: Optional[str] = None) -> Sequence[AttendanceRecord]:
        clauses = ["work_date BETWEEN %s AND %s"]
        params: list[object] = [start, end]
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(employee_id)

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE {where} ORDER BY work_date, employee_id",
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_recent(self, *, limit: int, employee_id: Optional[str] = None) -> Sequence[AttendanceRecord]:
        where = "WHERE employee_id=%s" if employee_id is not None else ""
        params: tuple = (employee_id, int(limit)) if employee_id is not None else (int(limit),)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM attendance_records
                {where}
                ORDER BY work_date DESC, clock_in_time DESC
                LIMIT %s
                """,
                params,
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_employee_ids(self) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT DISTINCT employee_id FROM attendance_records ORDER BY employee_id")
            return [str(r["employee_id"]) for r in fetchall(cur)]
