"""Run one auto clock-out sweep and exit.

For deployments that drive the sweep from cron instead of the in-process
scheduler (set SWEEPER_ENABLED=0 on the web app in that case).
"""

from __future__ import annotations

import json

from shift_attendance.container import build_container
from shift_attendance.main import configure_logging, load_settings


def main() -> None:
    settings = load_settings()
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(settings=settings)
    result = container.sweeper.sweep()
    print(json.dumps(result.to_dict()))
    if result.failed:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
