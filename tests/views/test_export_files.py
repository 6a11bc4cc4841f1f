from __future__ import annotations

import csv
import io

from src.attendance_register.attendance_register.document.seed import seed_document
from src.attendance_register.attendance_register.views.export import export_filename, write_csv
from src.attendance_register.attendance_register.views.filters import build_view, export_table


def test_filename_is_sanitized_title():
    assert export_filename("Absensi Guru - Periode 2024", "csv") == "absensi_guru___periode_2024.csv"


def test_filename_falls_back_when_title_is_empty():
    assert export_filename("", "csv") == "absensi.csv"


def test_csv_has_bom_and_one_row_per_visible_teacher():
    doc = seed_document()
    raw = write_csv(export_table(doc, build_view(doc, query="siti")))

    assert raw.startswith(b"\xef\xbb\xbf")
    rows = list(csv.reader(io.StringIO(raw.decode("utf-8-sig"))))
    assert rows[0][0] == "Nama Guru"
    assert rows[1][:3] == ["Siti Aminah", "67%", "Hadir"]
    assert len(rows) == 2
