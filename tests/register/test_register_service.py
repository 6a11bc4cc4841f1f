from __future__ import annotations

import asyncio

import pytest

from src.attendance_register.attendance_register.core.enums import ColumnType
from src.attendance_register.attendance_register.core.exceptions import AuthorizationError, ValidationError
from src.attendance_register.attendance_register.document.seed import seed_document
from src.attendance_register.attendance_register.register import service as service_module
from src.attendance_register.attendance_register.register.service import RegisterService
from fakes import make_controller


def _with_editor(check):
    async def main():
        controller, _, store, _ = make_controller()
        await controller.start()
        try:
            check(RegisterService(controller), store)
        finally:
            await controller.close()

    asyncio.run(main())


def test_read_only_session_cannot_edit():
    def check(editor, store):
        saves = len(store.saves)
        with pytest.raises(AuthorizationError):
            editor.update_cell("t_1", "col_mon", "Alpha", elevated=False)
        with pytest.raises(AuthorizationError):
            editor.add_teachers("Ana", elevated=False)
        with pytest.raises(AuthorizationError):
            editor.set_title("x", elevated=False)
        assert len(store.saves) == saves
        assert editor.document == seed_document()

    _with_editor(check)


def test_update_cell_saves_new_document():
    def check(editor, store):
        editor.update_cell("t_3", "col_mon", "Alpha", elevated=True)

        assert editor.document.cell("t_3", "col_mon") == "Alpha"
        assert store.document.cell("t_3", "col_mon") == "Alpha"

    _with_editor(check)


def test_update_cell_rejects_unknown_targets_and_bad_values():
    def check(editor, store):
        with pytest.raises(ValidationError):
            editor.update_cell("t_404", "col_mon", "Hadir", elevated=True)
        with pytest.raises(ValidationError):
            editor.update_cell("t_1", "col_404", "Hadir", elevated=True)
        with pytest.raises(ValidationError):
            editor.update_cell("t_1", "col_mon", "Libur", elevated=True)
        with pytest.raises(ValidationError):
            editor.update_cell("t_1", "col_percent", "100%", elevated=True)

    _with_editor(check)


def test_bulk_add_teachers_skips_blank_lines(monkeypatch):
    monkeypatch.setattr(service_module, "epoch_millis", lambda: 1700000000000)

    def check(editor, store):
        added = editor.add_teachers("Ana\n\n  Bayu  \n", elevated=True)

        assert [(t.id, t.name) for t in added] == [
            ("t_1700000000000_0", "Ana"),
            ("t_1700000000000_1", "Bayu"),
        ]
        assert [t.name for t in editor.document.teachers][-2:] == ["Ana", "Bayu"]
        with pytest.raises(ValidationError):
            editor.add_teachers(" \n ", elevated=True)

    _with_editor(check)


def test_delete_teacher_keeps_matrix_cells():
    def check(editor, store):
        editor.delete_teacher("t_1", elevated=True)

        assert editor.document.teacher("t_1") is None
        assert editor.document.data["t_1"]["col_mon"] == "Hadir"

    _with_editor(check)


def test_add_dated_column_gets_day_month_title(monkeypatch):
    monkeypatch.setattr(service_module, "epoch_millis", lambda: 42)

    def check(editor, store):
        col = editor.add_column("", "status", "2024-02-05", elevated=True)

        assert col.id == "col_42"
        assert col.title == "05/02"
        assert col.type == ColumnType.STATUS
        assert col.date == "2024-02-05"
        assert editor.document.columns[-1] == col

        second = editor.add_column("Jam Masuk", "time", elevated=True)
        assert second.id == "col_43"

    _with_editor(check)


def test_add_column_validation():
    def check(editor, store):
        with pytest.raises(ValidationError):
            editor.add_column("", "status", elevated=True)
        with pytest.raises(ValidationError):
            editor.add_column("X", "checkbox", elevated=True)
        with pytest.raises(ValidationError):
            editor.add_column("X", "status", "05-02-2024", elevated=True)

    _with_editor(check)


def test_fixed_columns_cannot_be_renamed_or_deleted():
    def check(editor, store):
        with pytest.raises(ValidationError):
            editor.rename_column("col_name", "Nama", elevated=True)
        with pytest.raises(ValidationError):
            editor.delete_column("col_percent", elevated=True)

        editor.rename_column("col_note", "Catatan", elevated=True)
        editor.delete_column("col_wed", elevated=True)
        ids = [c.id for c in editor.document.columns]
        assert "col_wed" not in ids
        assert editor.document.column("col_note").title == "Catatan"

    _with_editor(check)


def test_move_column_clamps_index():
    def check(editor, store):
        editor.move_column("col_note", 2, elevated=True)
        assert [c.id for c in editor.document.columns][2] == "col_note"

        editor.move_column("col_mon", 99, elevated=True)
        assert editor.document.columns[-1].id == "col_mon"

    _with_editor(check)


def test_set_title():
    def check(editor, store):
        editor.set_title("Absensi Semester 2", elevated=True)
        assert store.document.title == "Absensi Semester 2"

    _with_editor(check)
