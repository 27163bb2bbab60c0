from __future__ import annotations

from datetime import datetime, time
from types import SimpleNamespace

import pytest

from shift_attendance.core.enums import AttendanceStatus, ClockInDecision
from shift_attendance.shifts.policy import ShiftPolicy, policy_from_settings


@pytest.mark.parametrize(
    "at, expected",
    [
        (time(8, 59, 59), ClockInDecision.TOO_EARLY),
        (time(9, 0, 0), ClockInDecision.ON_TIME),
        (time(9, 0, 1), ClockInDecision.LATE),
        (time(10, 30), ClockInDecision.LATE),
        (time(11, 0, 0), ClockInDecision.LATE),
        (time(11, 0, 1), ClockInDecision.TOO_LATE_TODAY),
        (time(18, 0), ClockInDecision.TOO_LATE_TODAY),
    ],
)
def test_classify_clock_in_window_boundaries(at, expected):
    policy = ShiftPolicy()
    assert policy.classify_clock_in(datetime.combine(datetime(2026, 6, 1).date(), at)) == expected


def test_lateness_alone_never_makes_a_half_day():
    policy = ShiftPolicy()
    status = policy.classify_completed_shift(8.5, True, clock_out_time=datetime(2026, 6, 1, 19, 30))
    assert status == AttendanceStatus.LATE


def test_on_time_full_shift_is_present():
    policy = ShiftPolicy()
    status = policy.classify_completed_shift(10.0, False, clock_out_time=datetime(2026, 6, 1, 19, 0))
    assert status == AttendanceStatus.PRESENT


def test_early_departure_rule_demotes_to_half_day():
    policy = ShiftPolicy(early_departure_is_half_day=True)
    status = policy.classify_completed_shift(9.9, False, clock_out_time=datetime(2026, 6, 1, 18, 59, 59))
    assert status == AttendanceStatus.HALF_DAY


def test_early_departure_rule_can_be_disabled():
    policy = ShiftPolicy(early_departure_is_half_day=False)
    status = policy.classify_completed_shift(3.0, True, clock_out_time=datetime(2026, 6, 1, 13, 0))
    assert status == AttendanceStatus.LATE


def test_min_hours_rule_is_independent_of_clock_out_time():
    policy = ShiftPolicy(early_departure_is_half_day=False, half_day_min_hours=4.0)

    assert policy.classify_completed_shift(3.9, False) == AttendanceStatus.HALF_DAY
    assert policy.classify_completed_shift(4.0, False) == AttendanceStatus.PRESENT


def test_auto_closed_shift_is_exempt_from_both_half_day_rules():
    policy = ShiftPolicy(early_departure_is_half_day=True, half_day_min_hours=12.0)

    status = policy.classify_completed_shift(
        8.0,
        False,
        clock_out_time=datetime(2026, 6, 1, 19, 0),
        auto_closed=True,
    )
    assert status == AttendanceStatus.PRESENT


def test_invalid_window_is_rejected():
    with pytest.raises(ValueError):
        ShiftPolicy(shift_start=time(12, 0), late_cutoff=time(11, 0))
    with pytest.raises(ValueError):
        ShiftPolicy(late_cutoff=time(19, 0), shift_end=time(19, 0))


def test_policy_from_settings_parses_strings():
    settings = SimpleNamespace(
        SHIFT_START="08:30",
        LATE_CUTOFF="10:00",
        SHIFT_END="17:30:00",
        EARLY_DEPARTURE_HALF_DAY="0",
        HALF_DAY_MIN_HOURS="4.5",
    )

    policy = policy_from_settings(settings)

    assert policy.shift_start == time(8, 30)
    assert policy.late_cutoff == time(10, 0)
    assert policy.shift_end == time(17, 30)
    assert policy.early_departure_is_half_day is False
    assert policy.half_day_min_hours == 4.5


def test_policy_from_settings_defaults():
    policy = policy_from_settings(SimpleNamespace())
    assert policy == ShiftPolicy()
