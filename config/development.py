import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "leave_calendar"),
}

# CLT vacation splitting; any key may be overridden from the environment
VACATION_POLICY = {
    "annual_cap_days": int(os.getenv("VACATION_ANNUAL_CAP_DAYS", "30")),
    "min_split_days": int(os.getenv("VACATION_MIN_SPLIT_DAYS", "5")),
    "long_split_days": int(os.getenv("VACATION_LONG_SPLIT_DAYS", "14")),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, the leaves table is created on startup (CREATE TABLE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
