from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for register rule violations."""


class ValidationError(DomainError):
    """Cell value, column or roster input rejected by the register rules."""


class AuthenticationError(DomainError):
    """Raised when the gate secret is wrong."""


class AuthorizationError(DomainError):
    """Raised when a read-only session attempts a mutation or a remote write."""


class StorageError(DomainError):
    """Local store could not be opened, read or written."""


class SyncError(DomainError):
    """Remote document store failure; `endpoint` is the URL that failed, when known."""

    def __init__(self, message: str, *, endpoint: Optional[str] = None):
        super().__init__(message)
        self.endpoint = endpoint


class RemoteUnavailableError(SyncError):
    """Transport failure or non-2xx HTTP status."""


class RemoteProtocolError(SyncError):
    """Reachable endpoint, but the envelope or the document in it is unusable."""
