import os

SECRET_KEY = "test-secret"

# Never reach a real endpoint from tests
SCRIPT_URL = ""
ADMIN_PASSWORD = "admin123"

STORE_BACKEND = "sqlite"
SQLITE_PATH = os.getenv("SQLITE_PATH", "instance/attendance_register_test.sqlite3")

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "attendance_register_test",
}

DEBOUNCE_SECONDS = 0.05
STATUS_RESET_SECONDS = 0.1
PUSH_RESET_SECONDS = 0.1
SYNC_TIMEOUT = 2.0

LOG_LEVEL = "WARNING"
LOG_FILE = ""

DEBUG = False
TESTING = True
