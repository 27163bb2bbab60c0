"""Example: drive the clock engine and reports without Flask.

Controllers are a thin layer; this walks one shift through the services directly.
"""

from datetime import datetime

from shift_attendance.common.datetime_utils import FixedClock
from shift_attendance.config import testing
from shift_attendance.container import build_container


def main():
    clock = FixedClock(datetime(2026, 6, 1, 9, 20))
    container = build_container(settings=testing, clock=clock)

    record = container.clock_service.clock_in("e1", location="HQ")
    print("clock-in:", record.to_dict())

    clock.set(datetime(2026, 6, 1, 19, 5))
    print("sweep:", container.sweeper.sweep().to_dict())

    stats = container.aggregator.monthly_stats("e1", 2026, 6, as_of=clock.now().date())
    print("stats:", stats.to_dict())


if __name__ == "__main__":
    main()
