import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# Remote spreadsheet script endpoint; a URL saved from the app takes precedence
SCRIPT_URL = os.getenv("ATTENDANCE_SCRIPT_URL", "")

# Shared gate secret for elevated (admin) mode
ADMIN_PASSWORD = os.getenv("ATTENDANCE_ADMIN_PASSWORD", "admin123")

# Local store: "sqlite" (default) or "mysql"
STORE_BACKEND = os.getenv("STORE_BACKEND", "sqlite")
SQLITE_PATH = os.getenv("SQLITE_PATH", "instance/attendance_register.sqlite3")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_register"),
}

DEBOUNCE_SECONDS = float(os.getenv("DEBOUNCE_SECONDS", "2"))
STATUS_RESET_SECONDS = float(os.getenv("STATUS_RESET_SECONDS", "4"))
PUSH_RESET_SECONDS = float(os.getenv("PUSH_RESET_SECONDS", "3"))
SYNC_TIMEOUT = float(os.getenv("SYNC_TIMEOUT", "30"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_FILE = os.getenv("LOG_FILE", "")

DEBUG = True
