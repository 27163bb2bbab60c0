import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_test"),
}

STORE_BACKEND = "memory"

SHIFT_START = "09:00"
LATE_CUTOFF = "11:00"
SHIFT_END = "19:00"
EARLY_DEPARTURE_HALF_DAY = True
HALF_DAY_MIN_HOURS = None

COMPANY_TIMEZONE = "UTC"
HOLIDAYS = []

SWEEPER_ENABLED = False
SWEEP_INTERVAL_SECONDS = 60

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
