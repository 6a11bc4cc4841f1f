from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Protocol

import mysql.connector


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str


class ConnectionFactory(Protocol):
    """Opens a DB-API connection and knows the SQL dialect behind it."""

    placeholder: str

    def connect(self) -> Any:
        raise NotImplementedError

    def create_kv_table_sql(self, table: str) -> str:
        raise NotImplementedError

    def upsert_sql(self, table: str) -> str:
        raise NotImplementedError

    def read_version(self, cur) -> int:
        raise NotImplementedError

    def write_version(self, cur, version: int) -> None:
        raise NotImplementedError


class SQLiteConnection:
    """Single-file local store (the default backend).

    Note: We create short-lived connections per operation.
    """

    placeholder = "?"

    def __init__(self, path: str | Path):
        self._path = str(path)

    @property
    def path(self) -> str:
        return self._path

    def connect(self):
        Path(self._path).parent.mkdir(parents=True, exist_ok=True)
        return sqlite3.connect(self._path)

    def create_kv_table_sql(self, table: str) -> str:
        return f"CREATE TABLE IF NOT EXISTS {table} (item_key TEXT PRIMARY KEY, item_value TEXT NOT NULL)"

    def upsert_sql(self, table: str) -> str:
        return (
            f"INSERT INTO {table}(item_key, item_value) VALUES(?, ?) "
            "ON CONFLICT(item_key) DO UPDATE SET item_value=excluded.item_value"
        )

    def read_version(self, cur) -> int:
        cur.execute("PRAGMA user_version")
        row = cur.fetchone()
        return int(row[0]) if row else 0

    def write_version(self, cur, version: int) -> None:
        # PRAGMA does not accept bound parameters.
        cur.execute(f"PRAGMA user_version = {int(version)}")


class DatabaseConnection:
    """Singleton-like MySQL connection factory.

    Note: We create short-lived connections per operation.
    """

    placeholder = "%s"
    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
        )

    def create_kv_table_sql(self, table: str) -> str:
        return (
            f"CREATE TABLE IF NOT EXISTS {table} ("
            "item_key VARCHAR(64) PRIMARY KEY, item_value LONGTEXT NOT NULL"
            ") CHARACTER SET utf8mb4"
        )

    def upsert_sql(self, table: str) -> str:
        return (
            f"INSERT INTO {table}(item_key, item_value) VALUES(%s, %s) "
            "ON DUPLICATE KEY UPDATE item_value=VALUES(item_value)"
        )

    def read_version(self, cur) -> int:
        cur.execute("CREATE TABLE IF NOT EXISTS store_meta (id INT PRIMARY KEY, version INT NOT NULL)")
        cur.execute("SELECT version FROM store_meta WHERE id=1")
        row = cur.fetchone()
        return int(row[0]) if row else 0

    def write_version(self, cur, version: int) -> None:
        cur.execute(
            "INSERT INTO store_meta(id, version) VALUES(1, %s) ON DUPLICATE KEY UPDATE version=VALUES(version)",
            (int(version),),
        )
