from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, RecordChangeKind, RecordState


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar day."""

    attendance_id: int
    employee_id: str
    work_date: date
    clock_in_time: datetime
    clock_out_time: Optional[datetime]
    status: AttendanceStatus
    is_late: bool = False
    is_auto_clocked_out: bool = False
    working_hours: Optional[float] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    version: int = 1

    @property
    def state(self) -> RecordState:
        return RecordState.OPEN if self.clock_out_time is None else RecordState.CLOSED

    @property
    def is_open(self) -> bool:
        return self.clock_out_time is None

    def closed(
        self,
        *,
        clock_out_time: datetime,
        working_hours: float,
        status: AttendanceStatus,
        is_auto_clocked_out: bool,
        notes: Optional[str] = None,
    ) -> "AttendanceRecord":
        return replace(
            self,
            notes=self.notes if notes is None else notes,
            clock_out_time=clock_out_time,
            working_hours=working_hours,
            status=status,
            is_auto_clocked_out=is_auto_clocked_out,
            version=self.version + 1,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "employee_id": self.employee_id,
            "date": self.work_date.isoformat(),
            "clock_in_time": self.clock_in_time.isoformat(timespec="seconds"),
            "clock_out_time": self.clock_out_time.isoformat(timespec="seconds") if self.clock_out_time else None,
            "working_hours": self.working_hours,
            "status": self.status.value,
            "is_late": self.is_late,
            "is_auto_clocked_out": self.is_auto_clocked_out,
            "location": self.location,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class RecordChanged:
    """Event emitted after every successful write to a record."""

    kind: RecordChangeKind
    record: AttendanceRecord
