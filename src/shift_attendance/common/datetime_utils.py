from __future__ import annotations

from calendar import monthrange
from datetime import date, datetime, time, timedelta
from typing import Iterator, Protocol
from zoneinfo import ZoneInfo

from ..core.exceptions import ValidationError


class Clock(Protocol):
    def now(self) -> datetime:
        raise NotImplementedError


class CompanyClock:
    """Wall clock normalised to the company's timezone.

    Returns naive datetimes in company-local time, which is what records and
    the shift policy are expressed in.
    """

    def __init__(self, timezone_name: str = "UTC"):
        self._tz = ZoneInfo(timezone_name)

    @property
    def timezone(self) -> ZoneInfo:
        return self._tz

    def now(self) -> datetime:
        return datetime.now(self._tz).replace(tzinfo=None)


class FixedClock:
    """Clock pinned to a given instant; ``advance`` moves it forward."""

    def __init__(self, current: datetime):
        self._current = current

    def now(self) -> datetime:
        return self._current

    def set(self, current: datetime) -> None:
        self._current = current

    def advance(self, **kwargs) -> datetime:
        self._current = self._current + timedelta(**kwargs)
        return self._current


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date: {value!r}") from None


def parse_clock_time(value: str) -> time:
    """Parse HH:MM or HH:MM:SS into a time of day."""
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.strptime(value.strip(), fmt).time()
        except ValueError:
            continue
    raise ValueError(f"Invalid time of day: {value!r}")


def week_bounds(anchor: date) -> tuple[date, date]:
    """Monday..Sunday week containing ``anchor``."""
    start = anchor - timedelta(days=anchor.weekday())
    return start, start + timedelta(days=6)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    try:
        year, month = int(year), int(month)
    except (TypeError, ValueError):
        raise ValidationError("Year and month must be integers") from None
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month: {month!r}")
    last = monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last)


def iter_days(start: date, end: date) -> Iterator[date]:
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def hours_between(start: datetime, end: datetime) -> float:
    return max((end - start).total_seconds(), 0.0) / 3600.0
