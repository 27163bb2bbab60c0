from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Protocol, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_bounds, week_bounds
from ..common.validators import require_employee_id, require_positive_int
from ..core.constants import (
    AGGREGATE_HOURS_PRECISION,
    DEFAULT_RECENT_ACTIVITY_LIMIT,
    EXCELLENT_ATTENDANCE_PERCENT,
    GOOD_ATTENDANCE_PERCENT,
    PERCENT_PRECISION,
    REGULAR_HOURS_PER_DAY,
)
from ..core.enums import AttendanceRating, AttendanceStatus
from .calendar import HolidayCalendar, expected_working_days
from .model import MonthlyStats, TeamOverview, WeeklyHours


class EmployeeRoster(Protocol):
    def list_employee_ids(self) -> Sequence[str]:
        raise NotImplementedError


def rate_attendance(percent: float) -> AttendanceRating:
    if percent >= EXCELLENT_ATTENDANCE_PERCENT:
        return AttendanceRating.EXCELLENT
    if percent >= GOOD_ATTENDANCE_PERCENT:
        return AttendanceRating.GOOD
    return AttendanceRating.NEEDS_IMPROVEMENT


def _hours(value: float) -> float:
    return round(value, AGGREGATE_HOURS_PRECISION)


class AttendanceAggregator:
    """Read-only statistics over the attendance store.

    Absence is inferred: an expected working day with no record is absent.
    Every query reads only the records inside its date range.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        holidays: Optional[HolidayCalendar] = None,
        roster: Optional[EmployeeRoster] = None,
    ):
        self._attendance = attendance
        self._holidays = holidays
        self._roster = roster

    def weekly_hours(self, employee_id: str, anchor: date) -> WeeklyHours:
        employee_id = require_employee_id(employee_id)
        start, end = week_bounds(anchor)
        records = self._attendance.list_range(start=start, end=end, employee_id=employee_id)
        total = sum(r.working_hours or 0.0 for r in records)
        return WeeklyHours(
            employee_id=employee_id,
            week_start=start,
            week_end=end,
            total_hours=_hours(total),
            days_worked=len(records),
        )

    def monthly_stats(
        self,
        employee_id: Optional[str],
        year: int,
        month: int,
        *,
        as_of: Optional[date] = None,
    ) -> MonthlyStats:
        """Stats for one employee, or the whole team when ``employee_id`` is None or "*".

        ``as_of`` limits absence inference (and the working-day count) to days
        up to and including that date, for a month still in progress.
        """

        start, end = month_bounds(year, month)
        if employee_id in (None, "*"):
            records = self._attendance.list_range(start=start, end=end)
            employees = self._team(records)
            key = None
        else:
            key = require_employee_id(employee_id)
            records = self._attendance.list_range(start=start, end=end, employee_id=key)
            employees = [key]

        return self._summarise(key, int(year), int(month), records, employees, start, end, as_of)

    def team_overview(
        self,
        year: int,
        month: int,
        *,
        recent_limit: int = DEFAULT_RECENT_ACTIVITY_LIMIT,
        as_of: Optional[date] = None,
    ) -> TeamOverview:
        recent_limit = require_positive_int(recent_limit, "limit")
        start, end = month_bounds(year, month)
        records = self._attendance.list_range(start=start, end=end)

        by_employee: dict[str, list[AttendanceRecord]] = {e: [] for e in self._team(records)}
        for r in records:
            by_employee[r.employee_id].append(r)

        per_employee = {
            emp: self._summarise(emp, int(year), int(month), rows, [emp], start, end, as_of)
            for emp, rows in sorted(by_employee.items())
        }
        recent = sorted(records, key=lambda r: (r.work_date, r.clock_in_time), reverse=True)[:recent_limit]
        return TeamOverview(year=int(year), month=int(month), per_employee=per_employee, recent=recent)

    def _team(self, records: Iterable[AttendanceRecord]) -> list[str]:
        employees = {r.employee_id for r in records}
        if self._roster is not None:
            employees.update(self._roster.list_employee_ids())
        return sorted(employees)

    def _summarise(
        self,
        employee_id: Optional[str],
        year: int,
        month: int,
        records: Sequence[AttendanceRecord],
        employees: Sequence[str],
        start: date,
        end: date,
        as_of: Optional[date],
    ) -> MonthlyStats:
        window_end = min(end, as_of) if as_of is not None else end
        working_days = expected_working_days(start, window_end, self._holidays) if window_end >= start else []

        recorded = {(r.employee_id, r.work_date) for r in records}
        absent = sum(1 for emp in employees for day in working_days if (emp, day) not in recorded)
        working_day_count = len(working_days) * len(employees)

        present = sum(1 for r in records if r.status == AttendanceStatus.PRESENT)
        half_days = sum(1 for r in records if r.status == AttendanceStatus.HALF_DAY)
        late_count = sum(1 for r in records if r.is_late)

        hours = [r.working_hours or 0.0 for r in records]
        total = sum(hours)
        regular = sum(min(h, REGULAR_HOURS_PER_DAY) for h in hours)
        overtime = sum(max(h - REGULAR_HOURS_PER_DAY, 0.0) for h in hours)

        percent = round(present / working_day_count * 100, PERCENT_PRECISION) if working_day_count else 0.0

        return MonthlyStats(
            employee_id=employee_id,
            year=year,
            month=month,
            working_days=working_day_count,
            present=present,
            absent=absent,
            half_days=half_days,
            late_count=late_count,
            total_hours=_hours(total),
            regular_hours=_hours(regular),
            overtime_hours=_hours(overtime),
            avg_hours_per_day=_hours(total / max(present, 1)),
            attendance_percent=percent,
            rating=rate_attendance(percent),
        )
