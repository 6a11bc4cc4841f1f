"""Per-type cell rules.

Every ColumnType has exactly one entry in CELL_RULES; the table is checked
against the enum when the module is imported.
"""

from __future__ import annotations

import re
from typing import Callable

from ..core.constants import NAME_COLUMN_ID, PERCENT_COLUMN_ID
from ..core.enums import AttendanceStatus, ColumnType
from ..core.exceptions import ValidationError
from .model import Column

CellRule = Callable[[str], bool]

STATUS_VALUES = frozenset(s.value for s in AttendanceStatus)
_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _any_text(value: str) -> bool:
    return True


def _status(value: str) -> bool:
    return value == "" or value in STATUS_VALUES


def _time(value: str) -> bool:
    return value == "" or bool(_TIME_RE.match(value))


CELL_RULES: dict[ColumnType, CellRule] = {
    ColumnType.TEXT: _any_text,
    ColumnType.STATUS: _status,
    ColumnType.TIME: _time,
    ColumnType.NOTE: _any_text,
}

_missing = set(ColumnType) - set(CELL_RULES)
if _missing:
    raise RuntimeError(f"No cell rule for column types: {sorted(t.value for t in _missing)}")

# Derived from the roster/matrix, never stored per cell.
COMPUTED_COLUMN_IDS = frozenset({NAME_COLUMN_ID, PERCENT_COLUMN_ID})


def validate_cell(column: Column, value: str) -> str:
    if column.id in COMPUTED_COLUMN_IDS:
        raise ValidationError(f"Kolom '{column.title}' dihitung otomatis")
    if not CELL_RULES[column.type](value):
        raise ValidationError(f"Nilai {value!r} tidak valid untuk kolom '{column.title}' ({column.type.value})")
    return value
