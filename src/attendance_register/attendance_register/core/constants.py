"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Local store
DB_VERSION = 1
STORE_NAME = "app_data"
PREFERENCES_STORE_NAME = "preferences"

KEY_COLUMNS = "columns"
KEY_TEACHERS = "teachers"
KEY_DATA = "data"
KEY_TITLE = "title"
DOCUMENT_KEYS = (KEY_COLUMNS, KEY_TEACHERS, KEY_DATA, KEY_TITLE)

PREF_ADMIN_AUTH = "attendance_admin_auth"
PREF_SCRIPT_URL = "attendance_script_url"

# Fixed column roles
NAME_COLUMN_ID = "col_name"
PERCENT_COLUMN_ID = "col_percent"

# Sync timing (seconds)
DEFAULT_DEBOUNCE_SECONDS = 2.0
DEFAULT_STATUS_RESET_SECONDS = 4.0
DEFAULT_PUSH_RESET_SECONDS = 3.0
DEFAULT_SYNC_TIMEOUT_SECONDS = 30.0

DEFAULT_ADMIN_PASSWORD = "admin123"

EMPTY_CELL_PLACEHOLDER = "-"
DEFAULT_EXPORT_NAME = "absensi"
