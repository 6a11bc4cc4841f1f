from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional, Sequence

from ..core.enums import ColumnType

AttendanceData = dict[str, dict[str, str]]


@dataclass(frozen=True)
class Column:
    """Field definition in the attendance matrix."""

    id: str
    title: str
    type: ColumnType
    is_fixed: bool = False
    date: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"id": self.id, "title": self.title, "type": self.type.value}
        if self.is_fixed:
            out["isFixed"] = True
        if self.date:
            out["date"] = self.date
        return out

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Column":
        return cls(
            id=str(raw["id"]),
            title=str(raw.get("title") or ""),
            type=ColumnType(raw.get("type", ColumnType.TEXT.value)),
            is_fixed=bool(raw.get("isFixed", False)),
            date=str(raw["date"]) if raw.get("date") else None,
        )


@dataclass(frozen=True)
class Teacher:
    """Roster member."""

    id: str
    name: str
    nip: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"id": self.id, "name": self.name}
        if self.nip:
            out["nip"] = self.nip
        return out

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Teacher":
        nip = raw.get("nip")
        return cls(id=str(raw["id"]), name=str(raw.get("name") or ""), nip=str(nip) if nip else None)


def normalize_data(raw: Any) -> AttendanceData:
    """Coerce a decoded matrix into str -> str -> str, dropping unset cells.

    Rows that are not mappings are dropped; a matrix that is not a mapping
    raises TypeError.
    """

    if not raw:
        return {}
    if not isinstance(raw, Mapping):
        raise TypeError(f"attendance matrix must be an object, got {type(raw).__name__}")

    out: AttendanceData = {}
    for teacher_id, cells in raw.items():
        if not isinstance(cells, Mapping):
            continue
        out[str(teacher_id)] = {str(col_id): str(value) for col_id, value in cells.items() if value is not None}
    return out


@dataclass(frozen=True)
class Document:
    """The aggregate unit of persistence and synchronization.

    Treated as an immutable value: every edit builds a new Document, so a
    snapshot handed to a store or the remote client never changes underneath it.
    """

    columns: tuple[Column, ...] = ()
    teachers: tuple[Teacher, ...] = ()
    data: AttendanceData = field(default_factory=dict)
    title: str = ""

    def cell(self, teacher_id: str, column_id: str) -> str:
        return self.data.get(teacher_id, {}).get(column_id, "")

    def column(self, column_id: str) -> Optional[Column]:
        return next((c for c in self.columns if c.id == column_id), None)

    def teacher(self, teacher_id: str) -> Optional[Teacher]:
        return next((t for t in self.teachers if t.id == teacher_id), None)

    def with_cell(self, teacher_id: str, column_id: str, value: str) -> "Document":
        data = dict(self.data)
        data[teacher_id] = {**data.get(teacher_id, {}), column_id: value}
        return replace(self, data=data)

    def with_columns(self, columns: Sequence[Column]) -> "Document":
        return replace(self, columns=tuple(columns))

    def with_teachers(self, teachers: Sequence[Teacher]) -> "Document":
        return replace(self, teachers=tuple(teachers))

    def with_title(self, title: str) -> "Document":
        return replace(self, title=title)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "columns": [c.to_dict() for c in self.columns],
            "teachers": [t.to_dict() for t in self.teachers],
            "data": {tid: dict(cells) for tid, cells in self.data.items()},
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Document":
        return cls(
            columns=tuple(Column.from_dict(c) for c in raw.get("columns") or ()),
            teachers=tuple(Teacher.from_dict(t) for t in raw.get("teachers") or ()),
            data=normalize_data(raw.get("data")),
            title=str(raw.get("title") or ""),
        )
