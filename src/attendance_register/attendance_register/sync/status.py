from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from ..core.enums import SyncStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyncState:
    status: SyncStatus = SyncStatus.IDLE
    message: str = ""


Listener = Callable[[SyncState], None]


class SyncStatusTracker:
    """idle -> syncing -> success|error -> idle, with a timed revert.

    Each transition bumps a generation counter. A scheduled revert only
    applies if nothing newer has been set since it was scheduled; an `error`
    keeps its status (only the message is cleared) until something supersedes it.
    """

    def __init__(self) -> None:
        self._state = SyncState()
        self._generation = 0
        self._revert: Optional[asyncio.TimerHandle] = None
        self._listeners: list[Listener] = []

    @property
    def state(self) -> SyncState:
        return self._state

    @property
    def status(self) -> SyncStatus:
        return self._state.status

    @property
    def message(self) -> str:
        return self._state.message

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def set(self, status: SyncStatus, message: str = "") -> None:
        self._generation += 1
        self._cancel_revert()
        self._publish(SyncState(status=status, message=message))

    def revert_later(self, loop: asyncio.AbstractEventLoop, delay: float) -> None:
        self._cancel_revert()
        self._revert = loop.call_later(delay, self._apply_revert, self._generation)

    def close(self) -> None:
        self._cancel_revert()

    def _apply_revert(self, generation: int) -> None:
        self._revert = None
        if generation != self._generation:
            return
        if self._state.status == SyncStatus.ERROR:
            self._publish(SyncState(status=SyncStatus.ERROR))
        else:
            self._publish(SyncState())

    def _cancel_revert(self) -> None:
        if self._revert is not None:
            self._revert.cancel()
            self._revert = None

    def _publish(self, state: SyncState) -> None:
        if state != self._state:
            logger.debug("Sync status %s -> %s %s", self._state.status.value, state.status.value, state.message)
        self._state = state
        for listener in list(self._listeners):
            listener(state)
