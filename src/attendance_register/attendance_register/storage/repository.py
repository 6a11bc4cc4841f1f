from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from ..core.exceptions import StorageError
from ..document.model import Document


@dataclass(frozen=True)
class LoadResult:
    """Outcome of reading the local store.

    `document` is always usable: when the store failed, it holds the seed
    defaults and `error` says why.
    """

    document: Document
    error: Optional[StorageError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class DocumentStore(Protocol):
    def load(self) -> LoadResult:
        raise NotImplementedError

    def save(self, document: Document) -> Optional[StorageError]:
        """Persist all four fields atomically; return the error instead of raising."""

        raise NotImplementedError
