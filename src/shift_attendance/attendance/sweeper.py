from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

from ..common.datetime_utils import Clock, CompanyClock
from ..core.enums import RecordChangeKind
from ..shifts.policy import ShiftPolicy
from .events import RecordEventPublisher
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, RecordChanged
from .repository import AttendanceRepository
from .service import join_notes, record_hours

logger = logging.getLogger(__name__)


@dataclass
class SweepResult:
    closed: list[int] = field(default_factory=list)
    skipped: list[int] = field(default_factory=list)
    failed: list[int] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"closed": list(self.closed), "skipped": list(self.skipped), "failed": list(self.failed)}


class AutoClockOutSweeper:
    """Force-closes shifts that are still open after shift end.

    Open records from earlier days are closed as well, so a sweep after
    downtime catches up. Each record is closed at its own day's shift end.
    A record closed in the meantime (by the employee or another sweep) is
    left untouched.
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

    def sweep(self, *, now: Optional[datetime] = None) -> SweepResult:
        now = now or self._clock.now()
        today = now.date()
        if now >= self._policy.shift_end_at(today):
            cutoff_day = today
        else:
            cutoff_day = today - timedelta(days=1)

        result = SweepResult()
        candidates = self._attendance.list_open(on_or_before=cutoff_day)

        for candidate in candidates:
            try:
                closed = self._close_one(candidate)
            except Exception:
                logger.exception(
                    "Auto clock-out failed for record %s (%s, %s)",
                    candidate.attendance_id,
                    candidate.employee_id,
                    candidate.work_date.isoformat(),
                )
                result.failed.append(candidate.attendance_id)
                continue

            if closed is None:
                result.skipped.append(candidate.attendance_id)
            else:
                result.closed.append(closed.attendance_id)
                self._publisher.publish(RecordChanged(RecordChangeKind.AUTO_CLOCK_OUT, closed))

        if candidates:
            logger.info(
                "Auto clock-out sweep at %s: closed=%d skipped=%d failed=%d",
                now.isoformat(timespec="seconds"),
                len(result.closed),
                len(result.skipped),
                len(result.failed),
            )
        return result

    def _close_one(self, candidate: AttendanceRecord) -> Optional[AttendanceRecord]:
        # Re-read right before writing; the listing may be stale.
        record = self._attendance.get_by_id(candidate.attendance_id)
        if record is None or not record.is_open:
            return None

        clock_out_time = self._policy.shift_end_at(record.work_date)
        working_hours = record_hours(record.clock_in_time, clock_out_time)
        decision = self._factory.for_record(record).decide_close(
            clock_out_time=clock_out_time,
            working_hours=working_hours,
            policy=self._policy,
            auto_closed=True,
        )
        notes = join_notes(record.notes, decision.note)

        written = self._attendance.close_record(
            attendance_id=record.attendance_id,
            expected_version=record.version,
            clock_out_time=clock_out_time,
            working_hours=working_hours,
            status=decision.status,
            is_auto_clocked_out=True,
            notes=notes,
        )
        if not written:
            logger.debug("Record %s closed concurrently; auto clock-out skipped", record.attendance_id)
            return None

        logger.info(
            "Auto clocked out %s for %s on %s (%.1fh)",
            record.attendance_id,
            record.employee_id,
            record.work_date.isoformat(),
            working_hours,
        )
        return record.closed(
            clock_out_time=clock_out_time,
            working_hours=working_hours,
            status=decision.status,
            is_auto_clocked_out=True,
            notes=notes,
        )
