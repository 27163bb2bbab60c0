from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Protocol

from ..common.datetime_utils import iter_days, parse_iso_date


class HolidayCalendar(Protocol):
    def is_holiday(self, day: date) -> bool:
        raise NotImplementedError


class StaticHolidayCalendar:
    """Company holidays supplied up front (config or the HR collaborator)."""

    def __init__(self, holidays: Iterable[date] = ()):
        self._days = frozenset(holidays)

    @classmethod
    def from_strings(cls, values: Iterable[str]) -> "StaticHolidayCalendar":
        return cls(parse_iso_date(v.strip()) for v in values if v and v.strip())

    def is_holiday(self, day: date) -> bool:
        return day in self._days

    def __len__(self) -> int:
        return len(self._days)


def is_working_day(day: date, holidays: Optional[HolidayCalendar] = None) -> bool:
    if day.weekday() >= 5:
        return False
    return not (holidays is not None and holidays.is_holiday(day))


def expected_working_days(start: date, end: date, holidays: Optional[HolidayCalendar] = None) -> list[date]:
    """Weekdays in ``[start, end]`` minus company holidays."""
    return [d for d in iter_days(start, end) if is_working_day(d, holidays)]
