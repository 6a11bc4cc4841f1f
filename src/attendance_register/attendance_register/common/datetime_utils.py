from __future__ import annotations

import calendar
import time
from datetime import date, datetime
from typing import Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_optional_date(value: Optional[str], field_name: str = "Tanggal") -> Optional[date]:
    if not value:
        return None
    try:
        return parse_iso_date(value)
    except ValueError as e:
        raise ValidationError(f"{field_name} harus berformat YYYY-MM-DD") from e


def month_bounds(month: str) -> tuple[date, date]:
    """First and last calendar day of a YYYY-MM month."""
    try:
        first = datetime.strptime(month, "%Y-%m").date()
    except ValueError as e:
        raise ValidationError("Bulan harus berformat YYYY-MM") from e
    last_day = calendar.monthrange(first.year, first.month)[1]
    return first, first.replace(day=last_day)


def epoch_millis() -> int:
    """Current wall clock in milliseconds.

    Note: Wrapped so tests can patch it for deterministic ids.
    """
    return time.time_ns() // 1_000_000
