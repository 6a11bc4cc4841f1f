from __future__ import annotations

import logging
from typing import Optional, Protocol

from ..core.constants import DB_VERSION, PREFERENCES_STORE_NAME
from ..database.base import db_cursor, fetchone
from ..database.bootstrap import open_store
from ..database.connection import ConnectionFactory

logger = logging.getLogger(__name__)


class PreferenceRepository(Protocol):
    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError


class SQLPreferenceRepository(PreferenceRepository):
    """Session preferences kept beside the document, outside its four entries.

    Storage failures are logged and ignored; callers fall back to defaults.
    """

    def __init__(self, conn_factory: ConnectionFactory, *, version: int = DB_VERSION):
        self._conn_factory = conn_factory
        self._version = int(version)

    def get(self, key: str) -> Optional[str]:
        p = self._conn_factory.placeholder
        try:
            open_store(self._conn_factory, version=self._version)
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"SELECT item_value FROM {PREFERENCES_STORE_NAME} WHERE item_key={p}", (key,))
                row = fetchone(cur)
        except Exception as e:
            logger.error("Failed to read preference %s: %s", key, e)
            return None
        return str(row[0]) if row else None

    def set(self, key: str, value: str) -> None:
        try:
            open_store(self._conn_factory, version=self._version)
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(self._conn_factory.upsert_sql(PREFERENCES_STORE_NAME), (key, value))
        except Exception as e:
            logger.error("Failed to write preference %s: %s", key, e)

    def delete(self, key: str) -> None:
        p = self._conn_factory.placeholder
        try:
            open_store(self._conn_factory, version=self._version)
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"DELETE FROM {PREFERENCES_STORE_NAME} WHERE item_key={p}", (key,))
        except Exception as e:
            logger.error("Failed to delete preference %s: %s", key, e)
