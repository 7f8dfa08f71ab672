"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

# Key-value store keys
KEY_USERS = "app_users"
KEY_EMPLOYEES = "app_employees"
KEY_ATTENDANCE = "app_attendance"
KEY_NOTIFICATIONS = "app_notifications"
KEY_ACTIVE_USER = "active_user_id"
REMINDER_MARKER_PREFIX = "last_attendance_reminder_"

# Sentinel in allowed_companies meaning unrestricted access
WILDCARD = "*"

DEFAULT_ADMIN_ID = "admin-001"
DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "admin123"
DEFAULT_ADMIN_DISPLAY_NAME = "System Administrator"

DEFAULT_PASSWORD_MIN_LENGTH = 6
DEFAULT_REMINDER_THRESHOLD = 0.2
