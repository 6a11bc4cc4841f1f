from __future__ import annotations

from src.attendance_register.attendance_register.core.constants import NAME_COLUMN_ID, PERCENT_COLUMN_ID
from src.attendance_register.attendance_register.core.enums import ColumnType
from src.attendance_register.attendance_register.document.migration import ensure_percent_column
from src.attendance_register.attendance_register.document.model import Column


def _legacy_columns() -> list[Column]:
    return [
        Column(id=NAME_COLUMN_ID, title="Nama Guru", type=ColumnType.TEXT, is_fixed=True),
        Column(id="col_mon", title="Senin", type=ColumnType.STATUS, date="2024-01-01"),
        Column(id="col_note", title="Keterangan", type=ColumnType.NOTE),
    ]


def test_percent_column_goes_right_after_name_column():
    cols = ensure_percent_column(_legacy_columns())

    assert [c.id for c in cols] == [NAME_COLUMN_ID, PERCENT_COLUMN_ID, "col_mon", "col_note"]
    percent = cols[1]
    assert percent.is_fixed is True
    assert percent.type == ColumnType.TEXT
    assert percent.title == "% Hadir"


def test_percent_column_is_prepended_without_name_column():
    cols = ensure_percent_column(_legacy_columns()[1:])

    assert [c.id for c in cols] == [PERCENT_COLUMN_ID, "col_mon", "col_note"]


def test_migration_is_idempotent():
    once = ensure_percent_column(_legacy_columns())
    twice = ensure_percent_column(once)

    assert twice == once
    assert sum(1 for c in twice if c.id == PERCENT_COLUMN_ID) == 1


def test_existing_percent_column_is_left_where_it_is():
    cols = [*_legacy_columns(), Column(id=PERCENT_COLUMN_ID, title="% Hadir", type=ColumnType.TEXT, is_fixed=True)]

    assert ensure_percent_column(cols) == tuple(cols)


def test_empty_column_set_gets_only_percent_column():
    assert [c.id for c in ensure_percent_column([])] == [PERCENT_COLUMN_ID]
