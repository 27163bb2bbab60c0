from __future__ import annotations

from datetime import datetime

import pytest

from shift_attendance.attendance.events import RecordEventPublisher
from shift_attendance.attendance.memory_attendance_repository import InMemoryAttendanceRepository
from shift_attendance.attendance.service import ClockService
from shift_attendance.attendance.sweeper import AutoClockOutSweeper
from shift_attendance.common.datetime_utils import FixedClock
from shift_attendance.reports.aggregator import AttendanceAggregator
from shift_attendance.shifts.policy import ShiftPolicy


@pytest.fixture
def fixed_now() -> datetime:
    # Monday
    return datetime(2026, 6, 1, 9, 0, 0)


@pytest.fixture
def clock(fixed_now) -> FixedClock:
    return FixedClock(fixed_now)


@pytest.fixture
def policy() -> ShiftPolicy:
    return ShiftPolicy()


@pytest.fixture
def repo() -> InMemoryAttendanceRepository:
    return InMemoryAttendanceRepository()


@pytest.fixture
def publisher() -> RecordEventPublisher:
    return RecordEventPublisher()


@pytest.fixture
def events(publisher) -> list:
    received: list = []
    publisher.subscribe(received.append)
    return received


@pytest.fixture
def service(repo, policy, clock, publisher) -> ClockService:
    return ClockService(repo, policy, clock=clock, publisher=publisher)


@pytest.fixture
def sweeper(repo, policy, clock, publisher) -> AutoClockOutSweeper:
    return AutoClockOutSweeper(repo, policy, clock=clock, publisher=publisher)


@pytest.fixture
def aggregator(repo) -> AttendanceAggregator:
    return AttendanceAggregator(repo)
