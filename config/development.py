import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_payroll"),
}

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

# "fractional" or "whole_hours"; applies to manual and bulk payroll alike
OVERTIME_ROUNDING = os.getenv("OVERTIME_ROUNDING", "fractional")
LATE_GRACE_MINUTES = int(os.getenv("LATE_GRACE_MINUTES", "5"))

BULK_MAX_WORKERS = int(os.getenv("BULK_MAX_WORKERS", "4"))
BULK_EMPLOYEE_TIMEOUT_SECONDS = float(os.getenv("BULK_EMPLOYEE_TIMEOUT_SECONDS", "30"))
BULK_UPSERT_RETRIES = int(os.getenv("BULK_UPSERT_RETRIES", "0"))

# Serverless function that emails salary notifications; empty disables them
NOTIFY_URL = os.getenv("NOTIFY_URL", "")
NOTIFY_API_KEY = os.getenv("NOTIFY_API_KEY", "")
NOTIFY_TIMEOUT_SECONDS = float(os.getenv("NOTIFY_TIMEOUT_SECONDS", "10"))
