from __future__ import annotations

import logging
from datetime import datetime
from zoneinfo import ZoneInfo

from apscheduler.schedulers.background import BackgroundScheduler

from .attendance.sweeper import AutoClockOutSweeper
from .core.constants import DEFAULT_SWEEP_INTERVAL_SECONDS, DEFAULT_SWEEP_MISFIRE_GRACE_SECONDS
from .core.exceptions import StorageUnavailable

logger = logging.getLogger(__name__)

SWEEP_JOB_ID = "auto-clock-out-sweep"


def run_sweep(sweeper: AutoClockOutSweeper) -> None:
    """Scheduler entry point; never lets an error kill the job."""
    try:
        sweeper.sweep()
    except StorageUnavailable:
        logger.warning("Auto clock-out sweep skipped: attendance store unavailable", exc_info=True)
    except Exception:
        logger.exception("Auto clock-out sweep crashed")


def build_scheduler(
    sweeper: AutoClockOutSweeper,
    *,
    interval_seconds: int = DEFAULT_SWEEP_INTERVAL_SECONDS,
    timezone: str = "UTC",
) -> BackgroundScheduler:
    # Coalesce missed runs and never overlap: one sweep at a time is enough.
    scheduler = BackgroundScheduler(
        timezone=timezone,
        job_defaults={
            "coalesce": True,
            "max_instances": 1,
            "misfire_grace_time": DEFAULT_SWEEP_MISFIRE_GRACE_SECONDS,
        },
    )
    scheduler.add_job(
        run_sweep,
        "interval",
        args=[sweeper],
        seconds=int(interval_seconds),
        id=SWEEP_JOB_ID,
        replace_existing=True,
        next_run_time=datetime.now(ZoneInfo(timezone)),
    )
    return scheduler
