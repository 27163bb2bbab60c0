from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import ClockInDecision
from ..core.exceptions import TooEarly, WindowClosed
from ..shifts.policy import ShiftPolicy
from .model import AttendanceRecord
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on the shift policy."""

    def for_clock_in(self, *, now: datetime, policy: ShiftPolicy) -> AttendanceStrategy:
        decision = policy.classify_clock_in(now)
        if decision is ClockInDecision.TOO_EARLY:
            raise TooEarly(f"Clock-in opens at {policy.shift_start.strftime('%H:%M')}")
        if decision is ClockInDecision.TOO_LATE_TODAY:
            raise WindowClosed(f"Clock-in closed at {policy.late_cutoff.strftime('%H:%M')}")
        if decision is ClockInDecision.LATE:
            return LateStrategy()
        return NormalStrategy()

    def for_record(self, record: AttendanceRecord) -> AttendanceStrategy:
        return LateStrategy() if record.is_late else NormalStrategy()
