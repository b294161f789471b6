"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

# Partition keys in the key-value store.
STORAGE_KEY_USERS = "ems_users"
STORAGE_KEY_CURRENT_USER = "ems_current_user"
STORAGE_KEY_ATTENDANCE = "ems_attendance"
STORAGE_KEY_TIMEOFF = "ems_timeoff"

ALL_STORAGE_KEYS = (
    STORAGE_KEY_USERS,
    STORAGE_KEY_CURRENT_USER,
    STORAGE_KEY_ATTENDANCE,
    STORAGE_KEY_TIMEOFF,
)

# Login-ID layout: company(5) + first name(2) + last name(2) + year(4) + serial(4).
COMPANY_CODE_WIDTH = 5
NAME_CODE_WIDTH = 2
SERIAL_WIDTH = 4
LOGIN_ID_LENGTH = 17
LOGIN_ID_PAD_CHAR = "X"
DEFAULT_COMPANY_CODE = "COMP"
DEFAULT_NAME_CODE = "XX"

DEFAULT_COMPANY_NAME = "Company"
MIN_PASSWORD_LENGTH = 6

DEFAULT_ADMIN_ID = "admin001"
DEFAULT_ADMIN_LOGIN_ID = "ADMIN001"
DEFAULT_ADMIN_EMAIL = "admin@company.com"
DEFAULT_ADMIN_PASSWORD = "admin123"
