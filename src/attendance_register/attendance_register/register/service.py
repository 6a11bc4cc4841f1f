from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ..common.datetime_utils import epoch_millis, parse_optional_date
from ..common.validators import require_non_empty, require_one_of
from ..core.enums import ColumnType
from ..core.exceptions import AuthorizationError, ValidationError
from ..document.column_types import validate_cell
from ..document.model import Column, Document, Teacher
from ..sync.controller import SyncController


class RegisterService:
    """Use case: admin edits of the register.

    Every edit builds a new Document from the current one and commits it
    through the SyncController (local save + debounced push). Callers pass
    their own mode as `elevated`; read-only callers get AuthorizationError
    and nothing changes.
    """

    def __init__(self, controller: SyncController):
        self._controller = controller

    @property
    def document(self) -> Document:
        return self._controller.document

    @staticmethod
    def _require_admin(elevated: bool) -> None:
        if not elevated:
            raise AuthorizationError("Hanya admin yang dapat mengubah data")

    def _require_column(self, column_id: str) -> Column:
        column = self.document.column(column_id)
        if column is None:
            raise ValidationError(f"Kolom {column_id!r} tidak ditemukan")
        return column

    def update_cell(self, teacher_id: str, column_id: str, value: str, *, elevated: bool) -> Document:
        self._require_admin(elevated)
        column = self._require_column(column_id)
        if self.document.teacher(teacher_id) is None:
            raise ValidationError(f"Guru {teacher_id!r} tidak ditemukan")
        value = validate_cell(column, value or "")
        return self._controller.commit(self.document.with_cell(teacher_id, column_id, value), elevated=True)

    def add_teachers(self, text: str, *, elevated: bool) -> list[Teacher]:
        """Bulk add: one name per line, blank lines ignored, order kept."""

        self._require_admin(elevated)
        names = [line.strip() for line in (text or "").split("\n") if line.strip()]
        if not names:
            raise ValidationError("Nama guru tidak boleh kosong")

        existing = {t.id for t in self.document.teachers}
        stamp = epoch_millis()
        while any(f"t_{stamp}_{i}" in existing for i in range(len(names))):
            stamp += 1

        added = [Teacher(id=f"t_{stamp}_{i}", name=name) for i, name in enumerate(names)]
        self._controller.commit(self.document.with_teachers([*self.document.teachers, *added]), elevated=True)
        return added

    def delete_teacher(self, teacher_id: str, *, elevated: bool) -> Document:
        # Matrix cells of the teacher stay in storage, unreachable from any view.
        self._require_admin(elevated)
        if self.document.teacher(teacher_id) is None:
            raise ValidationError(f"Guru {teacher_id!r} tidak ditemukan")
        teachers = [t for t in self.document.teachers if t.id != teacher_id]
        return self._controller.commit(self.document.with_teachers(teachers), elevated=True)

    def add_column(
        self,
        title: str,
        column_type: str = ColumnType.STATUS.value,
        date: Optional[str] = None,
        *,
        elevated: bool,
    ) -> Column:
        self._require_admin(elevated)
        require_one_of(column_type, {t.value for t in ColumnType}, "Tipe kolom")
        col_date = parse_optional_date(date)
        if col_date and not (title or "").strip():
            title = col_date.strftime("%d/%m")
        title = require_non_empty(title, "Judul kolom")

        existing = {c.id for c in self.document.columns}
        stamp = epoch_millis()
        while f"col_{stamp}" in existing:
            stamp += 1

        column = Column(
            id=f"col_{stamp}",
            title=title,
            type=ColumnType(column_type),
            is_fixed=False,
            date=col_date.isoformat() if col_date else None,
        )
        self._controller.commit(self.document.with_columns([*self.document.columns, column]), elevated=True)
        return column

    def rename_column(self, column_id: str, title: str, *, elevated: bool) -> Document:
        self._require_admin(elevated)
        column = self._require_column(column_id)
        if column.is_fixed:
            raise ValidationError(f"Kolom tetap '{column.title}' tidak dapat diubah")
        title = require_non_empty(title, "Judul kolom")
        columns = [replace(c, title=title) if c.id == column_id else c for c in self.document.columns]
        return self._controller.commit(self.document.with_columns(columns), elevated=True)

    def move_column(self, column_id: str, new_index: int, *, elevated: bool) -> Document:
        self._require_admin(elevated)
        column = self._require_column(column_id)
        columns = [c for c in self.document.columns if c.id != column_id]
        new_index = max(0, min(int(new_index), len(columns)))
        columns.insert(new_index, column)
        return self._controller.commit(self.document.with_columns(columns), elevated=True)

    def delete_column(self, column_id: str, *, elevated: bool) -> Document:
        self._require_admin(elevated)
        column = self._require_column(column_id)
        if column.is_fixed:
            raise ValidationError(f"Kolom tetap '{column.title}' tidak dapat dihapus")
        columns = [c for c in self.document.columns if c.id != column_id]
        return self._controller.commit(self.document.with_columns(columns), elevated=True)

    def set_title(self, title: str, *, elevated: bool) -> Document:
        self._require_admin(elevated)
        return self._controller.commit(self.document.with_title(title or ""), elevated=True)
