import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_payroll_test"),
}

DEBUG = False
TESTING = True

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

OVERTIME_ROUNDING = "fractional"
LATE_GRACE_MINUTES = 5

BULK_MAX_WORKERS = 2
BULK_EMPLOYEE_TIMEOUT_SECONDS = 5.0
BULK_UPSERT_RETRIES = 0

NOTIFY_URL = ""
NOTIFY_API_KEY = ""
NOTIFY_TIMEOUT_SECONDS = 1.0
