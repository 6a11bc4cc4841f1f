from __future__ import annotations

import asyncio
import threading
from typing import Any, Awaitable, Callable, Optional, TypeVar

T = TypeVar("T")


class EngineLoop:
    """One event loop on one background thread.

    Request threads hand work to it with `run`/`call`, so the Document,
    the debounce timer and the HTTP client are only touched from this loop.
    """

    def __init__(self, *, name: str = "attendance-register-engine"):
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(target=self._serve, name=name, daemon=True)
        self._started = False

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    def start(self) -> None:
        if not self._started:
            self._thread.start()
            self._started = True

    def run(self, coro: Awaitable[T], *, timeout: Optional[float] = None) -> T:
        return asyncio.run_coroutine_threadsafe(coro, self._loop).result(timeout)

    def call(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Run a plain callable on the loop thread and return its result."""

        async def _invoke() -> T:
            return fn(*args, **kwargs)

        return self.run(_invoke())

    def stop(self, *, timeout: float = 5.0) -> None:
        if not self._started:
            return
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(timeout)
        self._started = False
        if not self._thread.is_alive():
            self._loop.close()

    def _serve(self) -> None:
        asyncio.set_event_loop(self._loop)
        self._loop.run_forever()
