from __future__ import annotations

from ..core.constants import DB_VERSION
from ..database.connection import DatabaseConnection
from .kv_document_store import KeyValueDocumentStore


class MySQLDocumentStore(KeyValueDocumentStore):
    """Same four-entry layout on a shared MySQL server."""

    def __init__(self, conn_factory: DatabaseConnection, *, version: int = DB_VERSION):
        super().__init__(conn_factory, version=version)
