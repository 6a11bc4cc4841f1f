from __future__ import annotations

import logging
from typing import Sequence

from ..core.constants import NAME_COLUMN_ID, PERCENT_COLUMN_ID
from .model import Column
from .seed import seed_column

logger = logging.getLogger(__name__)


def ensure_percent_column(columns: Sequence[Column]) -> tuple[Column, ...]:
    """Insert the fixed percent column when data was stored before it existed.

    Goes right after the name column, or first when there is no name column.
    Idempotent: a column set that already has it is returned unchanged.
    """

    cols = list(columns)
    if any(c.id == PERCENT_COLUMN_ID for c in cols):
        return tuple(cols)

    percent = seed_column(PERCENT_COLUMN_ID)
    name_idx = next((i for i, c in enumerate(cols) if c.id == NAME_COLUMN_ID), None)
    if name_idx is None:
        cols.insert(0, percent)
    else:
        cols.insert(name_idx + 1, percent)

    logger.info("Migrated columns: inserted %s at index %d", PERCENT_COLUMN_ID, cols.index(percent))
    return tuple(cols)
