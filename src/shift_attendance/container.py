from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.events import RecordEventPublisher
from .attendance.factory import AttendanceStrategyFactory
from .attendance.memory_attendance_repository import InMemoryAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import ClockService
from .attendance.sweeper import AutoClockOutSweeper
from .common.datetime_utils import Clock, CompanyClock
from .core.constants import DEFAULT_COMPANY_TIMEZONE
from .database.connection import DBConfig, DatabaseConnection
from .reports.aggregator import AttendanceAggregator
from .reports.calendar import StaticHolidayCalendar
from .shifts.policy import ShiftPolicy, policy_from_settings


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    policy: ShiftPolicy
    clock: Clock
    holidays: StaticHolidayCalendar
    publisher: RecordEventPublisher

    attendance_repo: AttendanceRepository

    clock_service: ClockService
    sweeper: AutoClockOutSweeper
    aggregator: AttendanceAggregator


def build_container(
    *,
    settings=None,
    attendance_repo: Optional[AttendanceRepository] = None,
    policy: Optional[ShiftPolicy] = None,
    clock: Optional[Clock] = None,
) -> Container:
    """Wire repositories and services from a settings module.

    Explicit arguments win over settings, which is how tests inject an
    in-memory store and a fixed clock.
    """

    conn = None
    if attendance_repo is None:
        backend = str(getattr(settings, "STORE_BACKEND", "memory")).lower()
        if backend == "mysql":
            conn = DatabaseConnection.get_instance(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))
            attendance_repo = MySQLAttendanceRepository(conn)
        elif backend == "memory":
            attendance_repo = InMemoryAttendanceRepository()
        else:
            raise ValueError(f"Unknown STORE_BACKEND: {backend!r}")

    policy = policy or policy_from_settings(settings)
    clock = clock or CompanyClock(getattr(settings, "COMPANY_TIMEZONE", DEFAULT_COMPANY_TIMEZONE))
    holidays = StaticHolidayCalendar.from_strings(getattr(settings, "HOLIDAYS", []) or [])
    publisher = RecordEventPublisher()
    factory = AttendanceStrategyFactory()

    clock_service = ClockService(
        attendance_repo,
        policy,
        clock=clock,
        strategy_factory=factory,
        publisher=publisher,
    )
    sweeper = AutoClockOutSweeper(
        attendance_repo,
        policy,
        clock=clock,
        strategy_factory=factory,
        publisher=publisher,
    )
    aggregator = AttendanceAggregator(attendance_repo, holidays=holidays)

    return Container(
        conn=conn,
        policy=policy,
        clock=clock,
        holidays=holidays,
        publisher=publisher,
        attendance_repo=attendance_repo,
        clock_service=clock_service,
        sweeper=sweeper,
        aggregator=aggregator,
    )
