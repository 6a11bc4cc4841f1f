from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.attendance_register.attendance_register.container import build_connection
from src.attendance_register.attendance_register.database.bootstrap import open_store
from src.attendance_register.attendance_register.main import load_settings


def main(overrides: dict | None = None) -> int:
    settings = load_settings(overrides)
    conn = build_connection(settings)

    version = open_store(conn)
    backend = str(settings.get("STORE_BACKEND", "sqlite"))
    target = settings.get("SQLITE_PATH") if backend == "sqlite" else settings["DB_CONFIG"].get("database")
    print(f"OK: Local store ready -> {backend}:{target} (version={version})")
    return version


if __name__ == "__main__":
    main()
