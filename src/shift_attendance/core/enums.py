from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Caller role, as asserted by the upstream auth layer."""

    EMPLOYEE = "employee"
    OWNER = "owner"


class AttendanceStatus(str, Enum):
    """Final status stored on an attendance record."""

    PRESENT = "present"
    LATE = "late"
    HALF_DAY = "half_day"
    ABSENT = "absent"


class ClockInDecision(str, Enum):
    """Where a clock-in time falls relative to the shift window."""

    TOO_EARLY = "too_early"
    ON_TIME = "on_time"
    LATE = "late"
    TOO_LATE_TODAY = "too_late_today"


class RecordState(str, Enum):
    NO_RECORD = "no_record"
    OPEN = "open"
    CLOSED = "closed"


class RecordChangeKind(str, Enum):
    CLOCK_IN = "clock_in"
    CLOCK_OUT = "clock_out"
    AUTO_CLOCK_OUT = "auto_clock_out"


class AttendanceRating(str, Enum):
    """Banding used by owner overviews."""

    EXCELLENT = "excellent"
    GOOD = "good"
    NEEDS_IMPROVEMENT = "needs_improvement"
