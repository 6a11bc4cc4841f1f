from __future__ import annotations

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} tidak boleh kosong")
    return value.strip()


def require_one_of(value: str, choices, field_name: str) -> str:
    if value not in choices:
        raise ValidationError(f"{field_name} tidak valid: {value!r}")
    return value
