SECRET_KEY = "test-secret"

STORE_BACKEND = "memory"
STORE_PATH = ""

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "attendance_tracker_test",
}

DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "admin123"
DEFAULT_ADMIN_DISPLAY_NAME = "System Administrator"
PASSWORD_MIN_LENGTH = 6

REMINDER_ENABLED = True
REMINDER_THRESHOLD = 0.2

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
