from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Optional

from .connection import ConnectionFactory


@contextmanager
def db_cursor(conn_factory: ConnectionFactory) -> Iterator[tuple[Any, Any]]:
    """Yield (conn, cursor) inside one transaction.

    Commits when the block exits normally, rolls back on any exception.
    """

    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[tuple]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> list[tuple]:
    rows = cur.fetchall()
    return list(rows or [])
