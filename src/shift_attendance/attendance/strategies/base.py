from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ...shifts.policy import ShiftPolicy


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    is_late: bool = False
    note: Optional[str] = None


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an attendance status."""

    @abstractmethod
    def decide_clock_in(self, *, now: datetime, policy: ShiftPolicy) -> StatusDecision:
        raise NotImplementedError

    @abstractmethod
    def decide_close(
        self,
        *,
        clock_out_time: datetime,
        working_hours: float,
        policy: ShiftPolicy,
        auto_closed: bool,
    ) -> StatusDecision:
        raise NotImplementedError
