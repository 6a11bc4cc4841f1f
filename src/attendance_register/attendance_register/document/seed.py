"""Seed values used when no prior state exists."""

from __future__ import annotations

from ..core.constants import NAME_COLUMN_ID, PERCENT_COLUMN_ID
from ..core.enums import AttendanceStatus, ColumnType
from .model import AttendanceData, Column, Document, Teacher

INITIAL_COLUMNS: tuple[Column, ...] = (
    Column(id=NAME_COLUMN_ID, title="Nama Guru", type=ColumnType.TEXT, is_fixed=True),
    Column(id=PERCENT_COLUMN_ID, title="% Hadir", type=ColumnType.TEXT, is_fixed=True),
    Column(id="col_mon", title="Senin (Contoh)", type=ColumnType.STATUS, date="2024-01-01"),
    Column(id="col_tue", title="Selasa (Contoh)", type=ColumnType.STATUS, date="2024-01-02"),
    Column(id="col_wed", title="Rabu (Contoh)", type=ColumnType.STATUS, date="2024-01-03"),
    Column(id="col_note", title="Keterangan", type=ColumnType.NOTE),
)

INITIAL_TEACHERS: tuple[Teacher, ...] = (
    Teacher(id="t_1", name="Budi Santoso"),
    Teacher(id="t_2", name="Siti Aminah"),
    Teacher(id="t_3", name="Rudi Hartono"),
    Teacher(id="t_4", name="Dewi Lestari"),
)

_H = AttendanceStatus.HADIR.value


def initial_data() -> AttendanceData:
    return {
        "t_1": {"col_mon": _H, "col_tue": _H, "col_wed": AttendanceStatus.SAKIT.value},
        "t_2": {"col_mon": _H, "col_tue": AttendanceStatus.IZIN.value, "col_wed": _H},
    }


INITIAL_TITLE = "Absensi Guru - Periode 2024"


def seed_document() -> Document:
    return Document(
        columns=INITIAL_COLUMNS,
        teachers=INITIAL_TEACHERS,
        data=initial_data(),
        title=INITIAL_TITLE,
    )


def seed_column(column_id: str) -> Column:
    return next(c for c in INITIAL_COLUMNS if c.id == column_id)
