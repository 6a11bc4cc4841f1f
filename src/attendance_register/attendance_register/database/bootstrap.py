from __future__ import annotations

import logging

from ..core.constants import DB_VERSION, PREFERENCES_STORE_NAME, STORE_NAME
from .base import db_cursor
from .connection import ConnectionFactory

logger = logging.getLogger(__name__)


def _upgrade_to_1(conn_factory: ConnectionFactory, cur) -> None:
    cur.execute(conn_factory.create_kv_table_sql(STORE_NAME))
    cur.execute(conn_factory.create_kv_table_sql(PREFERENCES_STORE_NAME))


# version -> step bringing the store from version-1 up to version
_UPGRADES = {
    1: _upgrade_to_1,
}


def open_store(conn_factory: ConnectionFactory, *, version: int = DB_VERSION) -> int:
    """Open the store, running structural upgrades when `version` is newer.

    Every upgrade step only creates what is missing, so re-running one against
    an already provisioned store is harmless. Returns the stored version.
    """

    with db_cursor(conn_factory) as (_, cur):
        current = conn_factory.read_version(cur)
        if current >= version:
            return current

        for step in range(current + 1, version + 1):
            upgrade = _UPGRADES.get(step)
            if upgrade is None:
                raise RuntimeError(f"No upgrade step for store version {step}")
            upgrade(conn_factory, cur)

        conn_factory.write_version(cur, version)
        logger.info("Local store upgraded from version %d to %d", current, version)
        return version
