from __future__ import annotations

import csv
import io
import re

from ..core.constants import DEFAULT_EXPORT_NAME
from .filters import ExportTable


def export_filename(title: str, extension: str) -> str:
    stem = re.sub(r"[^a-z0-9]", "_", title or "", flags=re.IGNORECASE).lower()
    return f"{stem or DEFAULT_EXPORT_NAME}.{extension}"


def write_csv(table: ExportTable) -> bytes:
    """CSV with BOM so spreadsheet tools pick up UTF-8."""

    out = io.StringIO()
    writer = csv.writer(out)
    writer.writerow(table.headers)
    writer.writerows(table.rows)
    return out.getvalue().encode("utf-8-sig")
