from __future__ import annotations

import threading
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import iter_days
from ..core.enums import AttendanceStatus
from ..core.exceptions import AlreadyClockedIn
from .model import AttendanceRecord
from .repository import AttendanceRepository


class InMemoryAttendanceRepository(AttendanceRepository):
    """Process-local store; one lock guards every read and write."""

    def __init__(self, records: Sequence[AttendanceRecord] = ()):
        self._lock = threading.Lock()
        self._by_date: dict[date, dict[str, AttendanceRecord]] = {}
        self._by_id: dict[int, AttendanceRecord] = {}
        self._next_id = 1
        for record in records:
            self._put(record)
            self._next_id = max(self._next_id, record.attendance_id + 1)

    def _put(self, record: AttendanceRecord) -> None:
        self._by_date.setdefault(record.work_date, {})[record.employee_id] = record
        self._by_id[record.attendance_id] = record

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with self._lock:
            return self._by_date.get(work_date, {}).get(employee_id)

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with self._lock:
            return self._by_id.get(attendance_id)

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
        with self._lock:
            if employee_id in self._by_date.get(work_date, {}):
                raise AlreadyClockedIn()

            record = AttendanceRecord(
                attendance_id=self._next_id,
                employee_id=employee_id,
                work_date=work_date,
                clock_in_time=clock_in_time,
                clock_out_time=None,
                status=status,
                is_late=is_late,
                location=location,
                notes=notes,
            )
            self._next_id += 1
            self._put(record)
            return record

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
        with self._lock:
            current = self._by_id.get(attendance_id)
            if current is None or not current.is_open or current.version != expected_version:
                return False

            updated = current.closed(
                clock_out_time=clock_out_time,
                working_hours=working_hours,
                status=status,
                is_auto_clocked_out=is_auto_clocked_out,
                notes=notes,
            )
            self._put(updated)
            return True

    def list_open(self, *, on_or_before: date) -> Sequence[AttendanceRecord]:
        with self._lock:
            items = [r for r in self._by_id.values() if r.is_open and r.work_date <= on_or_before]
        items.sort(key=lambda r: (r.work_date, r.employee_id))
        return items

    def list_range(self, *, start: date, end: date, employee_id: Optional[str] = None) -> Sequence[AttendanceRecord]:
        items: list[AttendanceRecord] = []
        with self._lock:
            for day in iter_days(start, end):
                by_employee = self._by_date.get(day)
                if not by_employee:
                    continue
                if employee_id is not None:
                    record = by_employee.get(employee_id)
                    if record is not None:
                        items.append(record)
                else:
                    items.extend(by_employee[k] for k in sorted(by_employee))
        return items

    def list_recent(self, *, limit: int, employee_id: Optional[str] = None) -> Sequence[AttendanceRecord]:
        with self._lock:
            items = [r for r in self._by_id.values() if employee_id is None or r.employee_id == employee_id]
        items.sort(key=lambda r: (r.work_date, r.clock_in_time), reverse=True)
        return items[: int(limit)]

    def list_employee_ids(self) -> Sequence[str]:
        with self._lock:
            return sorted({r.employee_id for r in self._by_id.values()})
