from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import Clock, CompanyClock, hours_between
from ..common.validators import require_date_range, require_employee_id, require_positive_int
from ..core.constants import DEFAULT_HISTORY_LIMIT, RECORD_HOURS_PRECISION
from ..core.enums import RecordChangeKind
from ..core.exceptions import AlreadyClockedIn, AlreadyClockedOut, ClockRejected, NoOpenShift
from ..shifts.policy import ShiftPolicy
from .events import RecordEventPublisher
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, RecordChanged
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def join_notes(*parts: Optional[str]) -> Optional[str]:
    text = "; ".join(p.strip() for p in parts if p and p.strip())
    return text or None


def record_hours(clock_in_time: datetime, clock_out_time: datetime) -> float:
    return round(hours_between(clock_in_time, clock_out_time), RECORD_HOURS_PRECISION)


class ClockService:
    """Clock engine: NoRecord -> Open (clock-in) -> Closed (clock-out or auto clock-out).

    Every rejection is raised as a ClockRejected subclass with a stable code.
    StorageUnavailable from the repository propagates untouched.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        policy: Optional[ShiftPolicy] = None,
        *,
        clock: Optional[Clock] = None,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
        publisher: Optional[RecordEventPublisher] = None,
    ):
        self._attendance = attendance
        self._policy = policy or ShiftPolicy()
        self._clock = clock or CompanyClock()
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._publisher = publisher or RecordEventPublisher()

    @property
    def policy(self) -> ShiftPolicy:
        return self._policy

    def today(self) -> date:
        return self._clock.now().date()

    def clock_in(
        self,
        employee_id: str,
        *,
        now: Optional[datetime] = None,
        location: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> AttendanceRecord:
        employee_id = require_employee_id(employee_id)
        now = now or self._clock.now()
        today = now.date()

        try:
            if self._attendance.get_for_employee_and_date(employee_id, today):
                raise AlreadyClockedIn()

            strategy = self._factory.for_clock_in(now=now, policy=self._policy)
            decision = strategy.decide_clock_in(now=now, policy=self._policy)

            record = self._attendance.create_clock_in(
                employee_id=employee_id,
                work_date=today,
                clock_in_time=now,
                status=decision.status,
                is_late=decision.is_late,
                location=location,
                notes=join_notes(notes, decision.note),
            )
        except ClockRejected as exc:
            logger.info("Clock-in rejected for %s at %s: %s", employee_id, now.isoformat(), exc.code)
            raise

        logger.info("Clock-in %s for %s (%s)", record.attendance_id, employee_id, record.status.value)
        self._publisher.publish(RecordChanged(RecordChangeKind.CLOCK_IN, record))
        return record

    def clock_out(
        self,
        employee_id: str,
        *,
        now: Optional[datetime] = None,
        notes: Optional[str] = None,
    ) -> AttendanceRecord:
        employee_id = require_employee_id(employee_id)
        now = now or self._clock.now()
        today = now.date()

        try:
            record = self._attendance.get_for_employee_and_date(employee_id, today)
            if record is None:
                raise NoOpenShift()
            if not record.is_open:
                raise AlreadyClockedOut()

            working_hours = record_hours(record.clock_in_time, now)
            strategy = self._factory.for_record(record)
            decision = strategy.decide_close(
                clock_out_time=now,
                working_hours=working_hours,
                policy=self._policy,
                auto_closed=False,
            )
            merged_notes = join_notes(record.notes, notes, decision.note)

            written = self._attendance.close_record(
                attendance_id=record.attendance_id,
                expected_version=record.version,
                clock_out_time=now,
                working_hours=working_hours,
                status=decision.status,
                is_auto_clocked_out=False,
                notes=merged_notes,
            )
            if not written:
                # Closed by someone else (usually the sweeper) since we read it.
                raise AlreadyClockedOut()
        except ClockRejected as exc:
            logger.info("Clock-out rejected for %s at %s: %s", employee_id, now.isoformat(), exc.code)
            raise

        closed = record.closed(
            clock_out_time=now,
            working_hours=working_hours,
            status=decision.status,
            is_auto_clocked_out=False,
            notes=merged_notes,
        )
        logger.info(
            "Clock-out %s for %s (%.1fh, %s)",
            closed.attendance_id,
            employee_id,
            working_hours,
            closed.status.value,
        )
        self._publisher.publish(RecordChanged(RecordChangeKind.CLOCK_OUT, closed))
        return closed

    def get_today(self, employee_id: str, *, now: Optional[datetime] = None) -> Optional[AttendanceRecord]:
        employee_id = require_employee_id(employee_id)
        today = (now or self._clock.now()).date()
        return self._attendance.get_for_employee_and_date(employee_id, today)

    def get_range(self, employee_id: Optional[str], start: date, end: date) -> Sequence[AttendanceRecord]:
        """Records for one employee, or for everyone when ``employee_id`` is None or "*"."""

        require_date_range(start, end)
        if employee_id in (None, "*"):
            return self._attendance.list_range(start=start, end=end)
        return self._attendance.list_range(start=start, end=end, employee_id=require_employee_id(employee_id))

    def get_history(self, employee_id: str, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceRecord]:
        return self._attendance.list_recent(
            limit=require_positive_int(limit, "limit"),
            employee_id=require_employee_id(employee_id),
        )
