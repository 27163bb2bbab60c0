"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_SHIFT_START = time(9, 0)
DEFAULT_LATE_CUTOFF = time(11, 0)
DEFAULT_SHIFT_END = time(19, 0)

RECORD_HOURS_PRECISION = 1
AGGREGATE_HOURS_PRECISION = 2
PERCENT_PRECISION = 1

REGULAR_HOURS_PER_DAY = 8.0

EXCELLENT_ATTENDANCE_PERCENT = 95.0
GOOD_ATTENDANCE_PERCENT = 85.0

DEFAULT_HISTORY_LIMIT = 30
DEFAULT_RECENT_ACTIVITY_LIMIT = 10
DEFAULT_SWEEP_INTERVAL_SECONDS = 60
DEFAULT_SWEEP_MISFIRE_GRACE_SECONDS = 300
DEFAULT_COMPANY_TIMEZONE = "UTC"

EMPLOYEE_ID_HEADER = "X-Employee-Id"
ROLE_HEADER = "X-Employee-Role"
