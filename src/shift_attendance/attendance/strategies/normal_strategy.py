from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from ...shifts.policy import ShiftPolicy
from .base import AttendanceStrategy, StatusDecision


class NormalStrategy(AttendanceStrategy):
    """On-time clock-in."""

    is_late = False

    def decide_clock_in(self, *, now: datetime, policy: ShiftPolicy) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT, is_late=False)

    def decide_close(
        self,
        *,
        clock_out_time: datetime,
        working_hours: float,
        policy: ShiftPolicy,
        auto_closed: bool,
    ) -> StatusDecision:
        status = policy.classify_completed_shift(
            working_hours,
            self.is_late,
            clock_out_time=clock_out_time,
            auto_closed=auto_closed,
        )
        note = "Automatically clocked out at shift end" if auto_closed else None
        return StatusDecision(status=status, is_late=self.is_late, note=note)
