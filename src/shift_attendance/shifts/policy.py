from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..common.datetime_utils import parse_clock_time
from ..core.constants import DEFAULT_LATE_CUTOFF, DEFAULT_SHIFT_END, DEFAULT_SHIFT_START
from ..core.enums import AttendanceStatus, ClockInDecision


@dataclass(frozen=True)
class ShiftPolicy:
    """Company shift window and the rules that classify attendance against it.

    Two half-day rules exist and can be switched independently:

    - ``early_departure_is_half_day``: an employee clock-out strictly before
      ``shift_end`` demotes the day to half-day.
    - ``half_day_min_hours``: worked hours strictly below this threshold demote
      the day to half-day.

    Neither rule applies to shifts closed by the auto clock-out, and lateness
    on its own never produces a half-day.
    """

    shift_start: time = DEFAULT_SHIFT_START
    late_cutoff: time = DEFAULT_LATE_CUTOFF
    shift_end: time = DEFAULT_SHIFT_END
    early_departure_is_half_day: bool = True
    half_day_min_hours: Optional[float] = None

    def __post_init__(self):
        if not (self.shift_start <= self.late_cutoff < self.shift_end):
            raise ValueError("Shift policy requires shift_start <= late_cutoff < shift_end")
        if self.half_day_min_hours is not None and self.half_day_min_hours < 0:
            raise ValueError("half_day_min_hours must not be negative")

    def shift_start_at(self, day: date) -> datetime:
        return datetime.combine(day, self.shift_start)

    def late_cutoff_at(self, day: date) -> datetime:
        return datetime.combine(day, self.late_cutoff)

    def shift_end_at(self, day: date) -> datetime:
        return datetime.combine(day, self.shift_end)

    def classify_clock_in(self, now: datetime) -> ClockInDecision:
        at = now.time()
        if at < self.shift_start:
            return ClockInDecision.TOO_EARLY
        if at == self.shift_start:
            return ClockInDecision.ON_TIME
        if at <= self.late_cutoff:
            return ClockInDecision.LATE
        return ClockInDecision.TOO_LATE_TODAY

    def classify_completed_shift(
        self,
        working_hours: float,
        is_late: bool,
        *,
        clock_out_time: Optional[datetime] = None,
        auto_closed: bool = False,
    ) -> AttendanceStatus:
        base = AttendanceStatus.LATE if is_late else AttendanceStatus.PRESENT
        if auto_closed:
            return base

        if self.half_day_min_hours is not None and working_hours < self.half_day_min_hours:
            return AttendanceStatus.HALF_DAY

        if (
            self.early_departure_is_half_day
            and clock_out_time is not None
            and clock_out_time < self.shift_end_at(clock_out_time.date())
        ):
            return AttendanceStatus.HALF_DAY

        return base


def _as_time(value, default: time) -> time:
    if value is None or value == "":
        return default
    if isinstance(value, time):
        return value
    return parse_clock_time(str(value))


def _as_bool(value, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def policy_from_settings(settings) -> ShiftPolicy:
    """Build a policy from a settings module (missing values fall back to defaults)."""

    min_hours = getattr(settings, "HALF_DAY_MIN_HOURS", None)
    return ShiftPolicy(
        shift_start=_as_time(getattr(settings, "SHIFT_START", None), DEFAULT_SHIFT_START),
        late_cutoff=_as_time(getattr(settings, "LATE_CUTOFF", None), DEFAULT_LATE_CUTOFF),
        shift_end=_as_time(getattr(settings, "SHIFT_END", None), DEFAULT_SHIFT_END),
        early_departure_is_half_day=_as_bool(getattr(settings, "EARLY_DEPARTURE_HALF_DAY", None), True),
        half_day_min_hours=float(min_hours) if min_hours not in (None, "") else None,
    )
