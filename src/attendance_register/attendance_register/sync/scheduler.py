from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class DebouncedTask:
    """Trailing debounce owned by its caller.

    `arm()` replaces any scheduled-but-not-fired run; a run that already
    fired is left to finish. Each firing awaits `action` exactly once.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop, delay: float, action: Callable[[], Awaitable[None]]):
        self._loop = loop
        self._delay = float(delay)
        self._action = action
        self._handle: Optional[asyncio.TimerHandle] = None
        self._inflight: set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def running(self) -> bool:
        return bool(self._inflight)

    def arm(self) -> None:
        self.cancel()
        self._handle = self._loop.call_later(self._delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def flush(self) -> None:
        """Fire a scheduled run now instead of waiting for the delay."""

        if self._handle is not None:
            self.cancel()
            self._fire()

    async def drain(self) -> None:
        """Wait for runs that already fired."""

        if self._inflight:
            await asyncio.gather(*self._inflight, return_exceptions=True)

    def _fire(self) -> None:
        self._handle = None
        task = self._loop.create_task(self._action())
        self._inflight.add(task)
        task.add_done_callback(self._done)

    def _done(self, task: asyncio.Task) -> None:
        self._inflight.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Debounced action failed: %s", task.exception())
