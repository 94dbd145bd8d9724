import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "halaqat_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

INTERVIEW_WEEKDAYS = ("saturday", "tuesday")
INTERVIEW_TIME_SLOT = "after_asr"

SESSION_DAYS = 7

AUTO_INIT_DB = False
AUTO_SEED_DB = False
