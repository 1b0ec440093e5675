import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_payroll"),
}

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

OVERTIME_ROUNDING = os.getenv("OVERTIME_ROUNDING", "fractional")
LATE_GRACE_MINUTES = int(os.getenv("LATE_GRACE_MINUTES", "5"))

BULK_MAX_WORKERS = int(os.getenv("BULK_MAX_WORKERS", "8"))
BULK_EMPLOYEE_TIMEOUT_SECONDS = float(os.getenv("BULK_EMPLOYEE_TIMEOUT_SECONDS", "30"))
BULK_UPSERT_RETRIES = int(os.getenv("BULK_UPSERT_RETRIES", "1"))

NOTIFY_URL = os.getenv("NOTIFY_URL", "")
NOTIFY_API_KEY = os.getenv("NOTIFY_API_KEY", "")
NOTIFY_TIMEOUT_SECONDS = float(os.getenv("NOTIFY_TIMEOUT_SECONDS", "10"))
