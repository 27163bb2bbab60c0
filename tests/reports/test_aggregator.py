from __future__ import annotations

from datetime import date, datetime, time, timedelta

import pytest

from shift_attendance.common.datetime_utils import iter_days
from shift_attendance.core.enums import AttendanceRating, AttendanceStatus
from shift_attendance.core.exceptions import ValidationError
from shift_attendance.reports.aggregator import AttendanceAggregator, rate_attendance
from shift_attendance.reports.calendar import StaticHolidayCalendar, expected_working_days


def add_record(repo, employee_id, day, hours, *, status=AttendanceStatus.PRESENT, is_late=False, start=time(9)):
    clock_in = datetime.combine(day, start)
    record = repo.create_clock_in(
        employee_id=employee_id,
        work_date=day,
        clock_in_time=clock_in,
        status=AttendanceStatus.LATE if is_late else AttendanceStatus.PRESENT,
        is_late=is_late,
    )
    repo.close_record(
        attendance_id=record.attendance_id,
        expected_version=record.version,
        clock_out_time=clock_in + timedelta(hours=hours),
        working_hours=hours,
        status=status,
        is_auto_clocked_out=False,
    )
    return record


def june_weekdays() -> list[date]:
    return expected_working_days(date(2026, 6, 1), date(2026, 6, 30))


def test_june_2026_has_22_working_days():
    assert len(june_weekdays()) == 22


def test_monthly_stats_counts_present_late_and_inferred_absence(repo, aggregator):
    days = june_weekdays()
    for day in days[:20]:
        add_record(repo, "e1", day, 8.0)
    add_record(repo, "e1", days[20], 9.0, status=AttendanceStatus.LATE, is_late=True, start=time(9, 30))
    # days[21] has no record

    stats = aggregator.monthly_stats("e1", 2026, 6)

    assert stats.working_days == 22
    assert stats.present == 20
    assert stats.late_count == 1
    assert stats.absent == 1
    assert stats.half_days == 0
    assert stats.attendance_percent == 90.9
    assert stats.total_hours == 169.0
    assert stats.regular_hours == 168.0
    assert stats.overtime_hours == 1.0
    assert stats.avg_hours_per_day == 8.45
    assert stats.rating == AttendanceRating.GOOD


def test_half_days_are_counted_separately(repo, aggregator):
    add_record(repo, "e1", date(2026, 6, 1), 4.0, status=AttendanceStatus.HALF_DAY)

    stats = aggregator.monthly_stats("e1", 2026, 6, as_of=date(2026, 6, 1))

    assert stats.half_days == 1
    assert stats.present == 0
    assert stats.absent == 0


def test_as_of_limits_absence_to_elapsed_days(repo, aggregator):
    add_record(repo, "e1", date(2026, 6, 1), 8.0)

    stats = aggregator.monthly_stats("e1", 2026, 6, as_of=date(2026, 6, 3))

    assert stats.working_days == 3
    assert stats.absent == 2
    assert stats.attendance_percent == 33.3


def test_as_of_before_month_start_means_no_working_days(aggregator):
    stats = aggregator.monthly_stats("e1", 2026, 6, as_of=date(2026, 5, 31))

    assert stats.working_days == 0
    assert stats.absent == 0
    assert stats.attendance_percent == 0.0


def test_holidays_are_not_expected_working_days(repo):
    holidays = StaticHolidayCalendar.from_strings(["2026-06-01", " ", "2026-06-02"])
    aggregator = AttendanceAggregator(repo, holidays=holidays)

    stats = aggregator.monthly_stats("e1", 2026, 6)

    assert len(holidays) == 2
    assert stats.working_days == 20
    assert stats.absent == 20


def test_team_stats_scale_by_head_count(repo, aggregator):
    add_record(repo, "e1", date(2026, 6, 1), 8.0)
    add_record(repo, "e2", date(2026, 6, 1), 8.0)
    add_record(repo, "e2", date(2026, 6, 2), 8.0)

    stats = aggregator.monthly_stats("*", 2026, 6, as_of=date(2026, 6, 2))

    assert stats.employee_id is None
    assert stats.working_days == 4
    assert stats.present == 3
    assert stats.absent == 1
    assert stats.attendance_percent == 75.0


def test_weekly_hours_sum_monday_to_sunday(repo, aggregator):
    add_record(repo, "e1", date(2026, 6, 1), 8.0)
    add_record(repo, "e1", date(2026, 6, 3), 8.0)
    add_record(repo, "e1", date(2026, 6, 7), 8.0)
    add_record(repo, "e1", date(2026, 6, 8), 8.0)
    add_record(repo, "e2", date(2026, 6, 2), 8.0)

    weekly = aggregator.weekly_hours("e1", date(2026, 6, 4))

    assert weekly.week_start == date(2026, 6, 1)
    assert weekly.week_end == date(2026, 6, 7)
    assert weekly.total_hours == 24.0
    assert weekly.days_worked == 3


def test_open_shift_counts_zero_hours(repo, aggregator):
    repo.create_clock_in(
        employee_id="e1",
        work_date=date(2026, 6, 1),
        clock_in_time=datetime(2026, 6, 1, 9),
        status=AttendanceStatus.PRESENT,
        is_late=False,
    )

    assert aggregator.weekly_hours("e1", date(2026, 6, 1)).total_hours == 0.0


def test_team_overview_includes_roster_and_recent_activity(repo):
    class Roster:
        def list_employee_ids(self):
            return ["e3"]

    aggregator = AttendanceAggregator(repo, roster=Roster())
    for day in iter_days(date(2026, 6, 1), date(2026, 6, 3)):
        add_record(repo, "e1", day, 8.0)
    add_record(repo, "e2", date(2026, 6, 3), 8.0, start=time(10))

    overview = aggregator.team_overview(2026, 6, recent_limit=2, as_of=date(2026, 6, 3))

    assert list(overview.per_employee) == ["e1", "e2", "e3"]
    assert overview.per_employee["e3"].absent == 3
    assert overview.per_employee["e1"].attendance_percent == 100.0
    assert [(r.employee_id, r.work_date.day) for r in overview.recent] == [("e2", 3), ("e1", 3)]
    assert set(overview.to_dict()) == {"year", "month", "employees", "recent"}


def test_invalid_month_is_rejected(aggregator):
    with pytest.raises(ValidationError):
        aggregator.monthly_stats("e1", 2026, 13)


@pytest.mark.parametrize(
    "percent, rating",
    [
        (95.0, AttendanceRating.EXCELLENT),
        (94.9, AttendanceRating.GOOD),
        (85.0, AttendanceRating.GOOD),
        (84.9, AttendanceRating.NEEDS_IMPROVEMENT),
    ],
)
def test_rating_bands(percent, rating):
    assert rate_attendance(percent) == rating


def test_employee_without_records_in_month_is_not_on_the_team(repo, aggregator):
    add_record(repo, "left_in_jan", date(2026, 1, 5), 8.0)
    add_record(repo, "e1", date(2026, 6, 1), 8.0)

    overview = aggregator.team_overview(2026, 6, as_of=date(2026, 6, 1))
    stats = aggregator.monthly_stats("*", 2026, 6, as_of=date(2026, 6, 1))

    assert list(overview.per_employee) == ["e1"]
    assert stats.working_days == 1
    assert stats.attendance_percent == 100.0
