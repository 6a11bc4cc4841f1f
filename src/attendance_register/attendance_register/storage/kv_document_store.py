from __future__ import annotations

import json
import logging
from typing import Any, Optional

from ..core.constants import DB_VERSION, KEY_COLUMNS, KEY_DATA, KEY_TEACHERS, KEY_TITLE, DOCUMENT_KEYS, STORE_NAME
from ..core.exceptions import StorageError
from ..database.base import db_cursor, fetchall
from ..database.bootstrap import open_store
from ..database.connection import ConnectionFactory
from ..document.model import Column, Document, Teacher, normalize_data
from ..document.seed import INITIAL_COLUMNS, INITIAL_TEACHERS, INITIAL_TITLE, initial_data, seed_document
from .repository import DocumentStore, LoadResult

logger = logging.getLogger(__name__)


class KeyValueDocumentStore(DocumentStore):
    """Document persisted as four JSON entries of one key-value table."""

    def __init__(self, conn_factory: ConnectionFactory, *, version: int = DB_VERSION):
        self._conn_factory = conn_factory
        self._version = int(version)
        self._opened = False

    def _open(self) -> None:
        if not self._opened:
            open_store(self._conn_factory, version=self._version)
            self._opened = True

    def load(self) -> LoadResult:
        try:
            self._open()
            raw = self._read_entries()
            document = self._assemble(raw)
        except Exception as e:
            logger.error("Failed to load data from local store: %s", e)
            return LoadResult(document=seed_document(), error=StorageError(str(e)))
        return LoadResult(document=document)

    def save(self, document: Document) -> Optional[StorageError]:
        values = document.to_dict()
        try:
            self._open()
            sql = self._conn_factory.upsert_sql(STORE_NAME)
            with db_cursor(self._conn_factory) as (_, cur):
                for key in DOCUMENT_KEYS:
                    cur.execute(sql, (key, json.dumps(values[key], ensure_ascii=False)))
        except Exception as e:
            logger.error("Failed to save data to local store: %s", e)
            return StorageError(str(e))
        return None

    def _read_entries(self) -> dict[str, Any]:
        p = self._conn_factory.placeholder
        marks = ", ".join([p] * len(DOCUMENT_KEYS))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT item_key, item_value FROM {STORE_NAME} WHERE item_key IN ({marks})",
                DOCUMENT_KEYS,
            )
            rows = fetchall(cur)
        return {key: json.loads(value) for key, value in rows}

    @staticmethod
    def _assemble(raw: dict[str, Any]) -> Document:
        columns = raw.get(KEY_COLUMNS)
        teachers = raw.get(KEY_TEACHERS)
        data = raw.get(KEY_DATA)
        title = raw.get(KEY_TITLE)

        return Document(
            columns=tuple(Column.from_dict(c) for c in columns) if columns is not None else INITIAL_COLUMNS,
            teachers=tuple(Teacher.from_dict(t) for t in teachers) if teachers is not None else INITIAL_TEACHERS,
            data=normalize_data(data) if data is not None else initial_data(),
            title=str(title) if title else INITIAL_TITLE,
        )
