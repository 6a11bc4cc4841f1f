from __future__ import annotations

from pathlib import Path

from ..core.constants import DB_VERSION
from ..database.connection import SQLiteConnection
from .kv_document_store import KeyValueDocumentStore


class SQLiteDocumentStore(KeyValueDocumentStore):
    def __init__(self, path: str | Path, *, version: int = DB_VERSION):
        super().__init__(SQLiteConnection(path), version=version)
