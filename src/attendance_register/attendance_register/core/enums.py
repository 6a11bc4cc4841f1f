from __future__ import annotations

from enum import Enum


class ColumnType(str, Enum):
    """Kind of value a column holds."""

    TEXT = "text"
    STATUS = "status"
    TIME = "time"
    NOTE = "note"


class AttendanceStatus(str, Enum):
    """Status values stored in status-type cells."""

    HADIR = "Hadir"
    SAKIT = "Sakit"
    IZIN = "Izin"
    ALPHA = "Alpha"


class SyncStatus(str, Enum):
    """Process-scoped sync indicator (never persisted)."""

    IDLE = "idle"
    SYNCING = "syncing"
    SUCCESS = "success"
    ERROR = "error"


class SyncPhase(str, Enum):
    """Lifecycle of the synchronization controller."""

    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    MIGRATING = "migrating"
    READY = "ready"
    PULLING = "pulling"
    PUSHING = "pushing"
