from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..core.enums import AttendanceRating


@dataclass(frozen=True)
class WeeklyHours:
    employee_id: str
    week_start: date
    week_end: date
    total_hours: float
    days_worked: int

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "week_start": self.week_start.isoformat(),
            "week_end": self.week_end.isoformat(),
            "total_hours": self.total_hours,
            "days_worked": self.days_worked,
        }


@dataclass(frozen=True)
class MonthlyStats:
    """Read-model for a month of attendance (one employee or the whole team)."""

    employee_id: Optional[str]
    year: int
    month: int
    working_days: int
    present: int
    absent: int
    half_days: int
    late_count: int
    total_hours: float
    regular_hours: float
    overtime_hours: float
    avg_hours_per_day: float
    attendance_percent: float
    rating: AttendanceRating

    def to_dict(self) -> dict:
        data = asdict(self)
        data["rating"] = self.rating.value
        return data


@dataclass(frozen=True)
class TeamOverview:
    year: int
    month: int
    per_employee: dict[str, MonthlyStats] = field(default_factory=dict)
    recent: list[AttendanceRecord] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "month": self.month,
            "employees": {k: v.to_dict() for k, v in self.per_employee.items()},
            "recent": [r.to_dict() for r in self.recent],
        }
