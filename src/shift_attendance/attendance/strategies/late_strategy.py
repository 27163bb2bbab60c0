from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from ...shifts.policy import ShiftPolicy
from .base import StatusDecision
from .normal_strategy import NormalStrategy


class LateStrategy(NormalStrategy):
    """Clock-in after shift start, up to and including the late cutoff."""

    is_late = True

    def decide_clock_in(self, *, now: datetime, policy: ShiftPolicy) -> StatusDecision:
        minutes = int((now - policy.shift_start_at(now.date())).total_seconds() // 60)
        return StatusDecision(status=AttendanceStatus.LATE, is_late=True, note=f"Late by {minutes} min")
