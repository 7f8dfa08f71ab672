import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# file | mysql | memory
STORE_BACKEND = os.getenv("STORE_BACKEND", "file")
STORE_PATH = os.getenv("STORE_PATH", "instance/store")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_tracker"),
}

DEFAULT_ADMIN_USERNAME = os.getenv("DEFAULT_ADMIN_USERNAME", "admin")
DEFAULT_ADMIN_PASSWORD = os.getenv("DEFAULT_ADMIN_PASSWORD", "admin123")
DEFAULT_ADMIN_DISPLAY_NAME = os.getenv("DEFAULT_ADMIN_DISPLAY_NAME", "System Administrator")
PASSWORD_MIN_LENGTH = int(os.getenv("PASSWORD_MIN_LENGTH", "6"))

REMINDER_ENABLED = bool(int(os.getenv("REMINDER_ENABLED", "1")))
REMINDER_THRESHOLD = float(os.getenv("REMINDER_THRESHOLD", "0.2"))

DEBUG = True

# If enabled, the MySQL kv_store table is created on startup (idempotent)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
