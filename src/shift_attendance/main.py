from __future__ import annotations

import atexit
import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .config import get_settings_module
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .scheduler import build_scheduler

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def load_settings(settings_module: Optional[str] = None):
    load_dotenv(override=False)
    return importlib.import_module(settings_module or get_settings_module())


def create_app(settings_module: Optional[str] = None, *, container: Optional[Container] = None) -> Flask:
    settings = load_settings(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app = Flask(__name__)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if container is None:
        backend = str(getattr(settings, "STORE_BACKEND", "memory")).lower()
        if backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
            db_config = getattr(settings, "DB_CONFIG")
            apply_schema(db_config)
            logger.info("Attendance schema ready (tables=%d)", len(list_tables(db_config)))
        container = build_container(settings=settings)

    app.extensions["attendance_container"] = container
    register_attendance(app, container)

    if bool(getattr(settings, "SWEEPER_ENABLED", False)):
        scheduler = build_scheduler(
            container.sweeper,
            interval_seconds=int(getattr(settings, "SWEEP_INTERVAL_SECONDS", 60)),
            timezone=str(getattr(settings, "COMPANY_TIMEZONE", "UTC")),
        )
        scheduler.start()
        atexit.register(scheduler.shutdown, wait=False)
        app.extensions["attendance_scheduler"] = scheduler
        logger.info("Auto clock-out sweeper started")

    return app
