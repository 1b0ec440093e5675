"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

STANDARD_HOURS_PER_DAY = 8
DEFAULT_LATE_GRACE_MINUTES = 5

# Fallback rates (VND) used when no salary_settings row exists.
DEFAULT_SHIFT_RATE = 200_000
DEFAULT_OVERTIME_RATE = 30_000
DEFAULT_LATE_PENALTY_PER_TIME = 50_000
DEFAULT_ABSENCE_PENALTY_PER_DAY = 200_000

AUTO_CALCULATED_NOTE = "Tự động tính từ chấm công"

DEFAULT_BULK_MAX_WORKERS = 4
DEFAULT_BULK_EMPLOYEE_TIMEOUT_SECONDS = 30
DEFAULT_BULK_UPSERT_RETRIES = 0
DEFAULT_NOTIFY_TIMEOUT_SECONDS = 10
