import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "attendance"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_db"),
}

STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")

SHIFT_START = os.getenv("SHIFT_START", "09:00")
LATE_CUTOFF = os.getenv("LATE_CUTOFF", "11:00")
SHIFT_END = os.getenv("SHIFT_END", "19:00")
EARLY_DEPARTURE_HALF_DAY = bool(int(os.getenv("EARLY_DEPARTURE_HALF_DAY", "1")))
HALF_DAY_MIN_HOURS = os.getenv("HALF_DAY_MIN_HOURS") or None

COMPANY_TIMEZONE = os.getenv("COMPANY_TIMEZONE", "UTC")
HOLIDAYS = [d for d in os.getenv("HOLIDAYS", "").split(",") if d.strip()]

SWEEPER_ENABLED = bool(int(os.getenv("SWEEPER_ENABLED", "1")))
SWEEP_INTERVAL_SECONDS = int(os.getenv("SWEEP_INTERVAL_SECONDS", "60"))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
