from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import httpx

from .core.constants import (
    DEFAULT_ADMIN_PASSWORD,
    DEFAULT_DEBOUNCE_SECONDS,
    DEFAULT_PUSH_RESET_SECONDS,
    DEFAULT_STATUS_RESET_SECONDS,
    DEFAULT_SYNC_TIMEOUT_SECONDS,
)
from .database.connection import ConnectionFactory, DatabaseConnection, DBConfig, SQLiteConnection
from .register.service import RegisterService
from .remote.client import RemoteDocumentClient
from .runtime.engine_loop import EngineLoop
from .session.repository import SQLPreferenceRepository
from .session.service import AuthService, SessionService
from .storage.kv_document_store import KeyValueDocumentStore
from .storage.mysql_document_store import MySQLDocumentStore
from .storage.sqlite_document_store import SQLiteDocumentStore
from .sync.controller import SyncController


@dataclass(frozen=True)
class Container:
    engine: EngineLoop

    store: KeyValueDocumentStore
    preferences: SQLPreferenceRepository
    remote: RemoteDocumentClient

    auth_service: AuthService
    session_service: SessionService
    sync_controller: SyncController
    register_service: RegisterService


def build_connection(settings: dict[str, Any]) -> ConnectionFactory:
    backend = str(settings.get("STORE_BACKEND", "sqlite")).lower()
    if backend == "mysql":
        db_config = settings["DB_CONFIG"]
        return DatabaseConnection.get_instance(
            DBConfig(
                host=str(db_config["host"]),
                port=int(db_config.get("port", 3306)),
                user=str(db_config["user"]),
                password=str(db_config["password"]),
                database=str(db_config["database"]),
            )
        )
    if backend == "sqlite":
        return SQLiteConnection(settings.get("SQLITE_PATH", "instance/attendance_register.sqlite3"))
    raise ValueError(f"Unknown STORE_BACKEND: {backend!r}")


def build_container(*, settings: dict[str, Any], transport: Optional[httpx.AsyncBaseTransport] = None) -> Container:
    conn = build_connection(settings)

    if isinstance(conn, DatabaseConnection):
        store: KeyValueDocumentStore = MySQLDocumentStore(conn)
    else:
        store = SQLiteDocumentStore(conn.path)
    preferences = SQLPreferenceRepository(conn)
    remote = RemoteDocumentClient(
        timeout=float(settings.get("SYNC_TIMEOUT", DEFAULT_SYNC_TIMEOUT_SECONDS)),
        transport=transport,
    )

    auth_service = AuthService(settings.get("ADMIN_PASSWORD") or DEFAULT_ADMIN_PASSWORD)
    session_service = SessionService(
        preferences,
        auth_service,
        default_endpoint=settings.get("SCRIPT_URL") or None,
    )
    sync_controller = SyncController(
        store,
        remote,
        session_service,
        debounce_seconds=float(settings.get("DEBOUNCE_SECONDS", DEFAULT_DEBOUNCE_SECONDS)),
        status_reset_seconds=float(settings.get("STATUS_RESET_SECONDS", DEFAULT_STATUS_RESET_SECONDS)),
        push_reset_seconds=float(settings.get("PUSH_RESET_SECONDS", DEFAULT_PUSH_RESET_SECONDS)),
    )
    register_service = RegisterService(sync_controller)

    return Container(
        engine=EngineLoop(),
        store=store,
        preferences=preferences,
        remote=remote,
        auth_service=auth_service,
        session_service=session_service,
        sync_controller=sync_controller,
        register_service=register_service,
    )
