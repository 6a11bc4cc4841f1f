from __future__ import annotations

import math
import unicodedata
from dataclasses import dataclass, replace
from datetime import date
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import month_bounds, parse_iso_date, parse_optional_date
from ..core.constants import EMPTY_CELL_PLACEHOLDER, NAME_COLUMN_ID, PERCENT_COLUMN_ID
from ..core.enums import AttendanceStatus, ColumnType
from ..document.model import AttendanceData, Column, Document, Teacher


def _collation_key(name: str) -> tuple[str, str]:
    # Accent- and case-insensitive first, exact text as tie-breaker.
    folded = unicodedata.normalize("NFKD", name)
    folded = "".join(ch for ch in folded if not unicodedata.combining(ch)).casefold()
    return folded, name


def filter_teachers(teachers: Iterable[Teacher], query: str = "") -> list[Teacher]:
    """Case-insensitive substring match on name, always sorted by name."""

    needle = (query or "").casefold()
    result = [t for t in teachers if needle in t.name.casefold()] if needle else list(teachers)
    return sorted(result, key=lambda t: _collation_key(t.name))


def filter_columns(
    columns: Sequence[Column],
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> list[Column]:
    """Keep fixed and dateless columns; dated ones must fall in [start, end]."""

    if start is None and end is None:
        return list(columns)

    out = []
    for col in columns:
        if col.is_fixed or not col.date:
            out.append(col)
            continue
        try:
            col_date = parse_iso_date(col.date)
        except ValueError:
            # Unreadable dates behave like dateless columns.
            out.append(col)
            continue
        if start is not None and col_date < start:
            continue
        if end is not None and col_date > end:
            continue
        out.append(col)
    return out


def attendance_percentage(teacher_id: str, columns: Iterable[Column], data: AttendanceData) -> int:
    status_cols = [c for c in columns if c.type == ColumnType.STATUS]
    if not status_cols:
        return 0
    cells = data.get(teacher_id, {})
    present = sum(1 for c in status_cols if cells.get(c.id) == AttendanceStatus.HADIR.value)
    # Half-up, not banker's rounding.
    return int(math.floor(present * 100 / len(status_cols) + 0.5))


def format_percentage(value: int) -> str:
    return f"{value}%"


@dataclass(frozen=True)
class PeriodFilter:
    """Month shortcut and manual range; whichever was set last wins."""

    month: str = ""
    start: str = ""
    end: str = ""

    def select_month(self, month: str) -> "PeriodFilter":
        if not month:
            return PeriodFilter()
        first, last = month_bounds(month)
        return PeriodFilter(month=month, start=first.isoformat(), end=last.isoformat())

    def with_start(self, value: str) -> "PeriodFilter":
        return replace(self, month="", start=value or "")

    def with_end(self, value: str) -> "PeriodFilter":
        return replace(self, month="", end=value or "")

    def bounds(self) -> tuple[Optional[date], Optional[date]]:
        return (
            parse_optional_date(self.start, "Tanggal mulai"),
            parse_optional_date(self.end, "Tanggal akhir"),
        )


@dataclass(frozen=True)
class RegisterView:
    columns: list[Column]
    teachers: list[Teacher]
    percentages: dict[str, int]


def build_view(document: Document, *, query: str = "", period: Optional[PeriodFilter] = None) -> RegisterView:
    start, end = (period or PeriodFilter()).bounds()
    columns = filter_columns(document.columns, start, end)
    teachers = filter_teachers(document.teachers, query)
    percentages = {t.id: attendance_percentage(t.id, columns, document.data) for t in teachers}
    return RegisterView(columns=columns, teachers=teachers, percentages=percentages)


def export_value(teacher: Teacher, column: Column, columns: Sequence[Column], data: AttendanceData) -> str:
    if column.id == NAME_COLUMN_ID:
        return teacher.name
    if column.id == PERCENT_COLUMN_ID:
        return format_percentage(attendance_percentage(teacher.id, columns, data))
    return data.get(teacher.id, {}).get(column.id) or EMPTY_CELL_PLACEHOLDER


@dataclass(frozen=True)
class ExportTable:
    headers: list[str]
    rows: list[list[str]]


def export_table(document: Document, view: RegisterView) -> ExportTable:
    headers = [c.title for c in view.columns]
    rows = [[export_value(t, c, view.columns, document.data) for c in view.columns] for t in view.teachers]
    return ExportTable(headers=headers, rows=rows)
