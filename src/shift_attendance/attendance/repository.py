from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Durable per-employee-per-day records.

    Implementations enforce uniqueness of ``(employee_id, work_date)`` in the
    store itself and translate I/O failures into ``StorageUnavailable``.
    """

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

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
        """Insert an open record.

        Raises AlreadyClockedIn if a record already exists for the key.
        """

        raise NotImplementedError

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
        """Close an open record if it is still open and at ``expected_version``.

        Returns False, without writing, when the record is already closed or
        was changed concurrently.
        """

        raise NotImplementedError

    def list_open(self, *, on_or_before: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_range(self, *, start: date, end: date, employee_id: Optional[str] = None) -> Sequence[AttendanceRecord]:
        """Records with ``start <= work_date <= end`` ordered by date then employee."""

        raise NotImplementedError

    def list_recent(self, *, limit: int, employee_id: Optional[str] = None) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_employee_ids(self) -> Sequence[str]:
        raise NotImplementedError
