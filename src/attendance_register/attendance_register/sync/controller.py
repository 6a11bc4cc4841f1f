from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import Coroutine, Optional

from ..core.constants import (
    DEFAULT_DEBOUNCE_SECONDS,
    DEFAULT_PUSH_RESET_SECONDS,
    DEFAULT_STATUS_RESET_SECONDS,
)
from ..core.enums import SyncPhase, SyncStatus
from ..core.exceptions import AuthorizationError, SyncError
from ..document.migration import ensure_percent_column
from ..document.model import Document
from ..remote.client import RemoteDocumentClient
from ..session.service import SessionService
from ..storage.repository import DocumentStore
from .scheduler import DebouncedTask
from .status import SyncState, SyncStatusTracker

logger = logging.getLogger(__name__)

MSG_PULLING = "Mengunduh data terbaru dari Google Sheet..."
MSG_PULLED = "Data berhasil disinkronkan!"
MSG_PULL_FAILED = "Gagal mengambil data dari Google Sheet. Cek URL atau koneksi."
MSG_UPLOADING = "Data di Sheet kosong atau error. Mencoba mengunggah data lokal..."
MSG_UPLOADED = "Data lokal berhasil diunggah ke Google Sheet!"
MSG_SYNC_FAILED = "Gagal sinkronisasi."
MSG_SAVING = "Menyimpan ke Google Sheet..."
MSG_SAVED = "Tersimpan"


class SyncController:
    """Reconciles the in-memory Document with the local store and the remote store.

    Lifecycle: UNINITIALIZED -> LOADING -> MIGRATING -> READY once, then
    PULLING / PUSHING from READY as syncs run. All methods must be called on
    the event loop that ran `start()`.

    - Startup loads locally, migrates, publishes, and only then starts a
      background pull, so the register is usable without the network.
    - Every committed change is saved locally and, when the committing caller
      is elevated and an endpoint is configured, (re)arms a trailing-debounce
      push of the whole Document as it is when the timer fires. The mode is
      checked at arm time only.
    - A pull never clears local columns or roster with empty remote ones; the
      matrix is always taken from the remote.
    - Only a manual sync falls back to uploading local state when the pull
      fails. Automatic pulls never write to the remote.
    """

    def __init__(
        self,
        store: DocumentStore,
        remote: RemoteDocumentClient,
        session: SessionService,
        *,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        status_reset_seconds: float = DEFAULT_STATUS_RESET_SECONDS,
        push_reset_seconds: float = DEFAULT_PUSH_RESET_SECONDS,
    ):
        self._store = store
        self._remote = remote
        self._session = session
        self._debounce_seconds = float(debounce_seconds)
        self._status_reset_seconds = float(status_reset_seconds)
        self._push_reset_seconds = float(push_reset_seconds)

        self._phase = SyncPhase.UNINITIALIZED
        self._document = Document()
        self._status = SyncStatusTracker()
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._debounce: Optional[DebouncedTask] = None
        self._background: set[asyncio.Task] = set()

    @property
    def phase(self) -> SyncPhase:
        return self._phase

    @property
    def document(self) -> Document:
        return self._document

    @property
    def status(self) -> SyncStatusTracker:
        return self._status

    @property
    def sync_state(self) -> SyncState:
        return self._status.state

    @property
    def endpoint(self) -> Optional[str]:
        return self._session.endpoint

    @property
    def auto_push_pending(self) -> bool:
        return bool(self._debounce and self._debounce.pending)

    async def start(self) -> Document:
        if self._phase != SyncPhase.UNINITIALIZED:
            raise RuntimeError("SyncController already started")

        self._loop = asyncio.get_running_loop()
        self._debounce = DebouncedTask(self._loop, self._debounce_seconds, self._auto_push)

        self._phase = SyncPhase.LOADING
        result = self._store.load()
        if not result.ok:
            logger.warning("Local store unavailable, starting from seed defaults: %s", result.error)

        self._phase = SyncPhase.MIGRATING
        document = result.document.with_columns(ensure_percent_column(result.document.columns))

        self._document = document
        self._phase = SyncPhase.READY
        # Seed defaults must not overwrite a store that merely failed to read.
        if result.ok:
            self._store.save(document)

        endpoint = self.endpoint
        if endpoint:
            self._spawn(self.perform_sync(endpoint, is_manual=False))
        else:
            logger.info("No remote endpoint configured; sync inactive")
        return document

    def commit(self, document: Document, *, elevated: Optional[bool] = None) -> Document:
        """Publish a new Document: save locally and arm the auto-push.

        `elevated` is the caller's mode; None means the engine's own session
        (used for changes the engine makes itself, such as applied pulls).
        """

        self._require_ready()
        if document == self._document:
            return self._document

        self._document = document
        self._store.save(document)
        if self.endpoint and self._is_elevated(elevated):
            self._debounce.arm()
        return document

    async def perform_sync(self, endpoint: Optional[str], is_manual: bool) -> SyncStatus:
        if not endpoint:
            return self._status.status
        self._require_ready()

        self._status.set(SyncStatus.SYNCING, MSG_PULLING)
        self._phase = SyncPhase.PULLING
        try:
            try:
                pulled = await self._remote.pull(endpoint)
            except SyncError as e:
                logger.error("Pull from %s failed: %s", endpoint, e)
                self._status.set(SyncStatus.ERROR, MSG_PULL_FAILED)
                if is_manual:
                    await self._upload_fallback(endpoint)
            else:
                self._apply_pulled(pulled)
                self._status.set(SyncStatus.SUCCESS, MSG_PULLED)
        finally:
            self._phase = SyncPhase.READY
            self._status.revert_later(self._loop, self._status_reset_seconds)
        return self._status.status

    async def handle_save_url(self, url: str, *, elevated: Optional[bool] = None) -> SyncStatus:
        """Persist a new endpoint and sync against it right away (manual mode).

        Elevated mode only: the fallback upload writes the whole Document to
        whatever the URL points at.
        """

        if not self._is_elevated(elevated):
            raise AuthorizationError("Hanya admin yang dapat mengatur sinkronisasi")

        url = (url or "").strip()
        self._session.set_endpoint(url)
        return await self.perform_sync(url, is_manual=True)

    async def wait_for_background(self) -> None:
        """Wait for background pulls and already-fired pushes."""

        while self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)
        if self._debounce:
            await self._debounce.drain()

    async def close(self) -> None:
        if self._debounce:
            # Hand the last burst of edits to the remote instead of dropping it.
            self._debounce.flush()
        await self.wait_for_background()
        self._status.close()
        await self._remote.aclose()

    def _apply_pulled(self, pulled: Document) -> None:
        document = self._document
        if pulled.columns:
            document = document.with_columns(ensure_percent_column(pulled.columns))
        if pulled.teachers:
            document = document.with_teachers(pulled.teachers)
        document = replace(document, data=pulled.data)
        if pulled.title:
            document = document.with_title(pulled.title)
        self.commit(document)

    async def _upload_fallback(self, endpoint: str) -> None:
        self._status.set(SyncStatus.ERROR, MSG_UPLOADING)
        self._phase = SyncPhase.PUSHING
        try:
            await self._remote.push(endpoint, self._document)
        except SyncError as e:
            logger.error("Fallback upload to %s failed: %s", endpoint, e)
            self._status.set(SyncStatus.ERROR, MSG_SYNC_FAILED)
        else:
            logger.info("Uploaded local document to %s after failed pull", endpoint)
            self._status.set(SyncStatus.SUCCESS, MSG_UPLOADED)

    async def _auto_push(self) -> None:
        endpoint = self.endpoint
        if not endpoint:
            return

        snapshot = self._document
        self._status.set(SyncStatus.SYNCING, MSG_SAVING)
        self._phase = SyncPhase.PUSHING
        try:
            await self._remote.push(endpoint, snapshot)
        except SyncError as e:
            logger.error("Auto-push to %s failed: %s", endpoint, e)
            self._status.set(SyncStatus.ERROR, str(e))
        else:
            self._status.set(SyncStatus.SUCCESS, MSG_SAVED)
            self._status.revert_later(self._loop, self._push_reset_seconds)
        finally:
            self._phase = SyncPhase.READY

    def _spawn(self, coro: Coroutine) -> None:
        task = self._loop.create_task(coro)
        self._background.add(task)
        task.add_done_callback(self._background_done)

    def _background_done(self, task: asyncio.Task) -> None:
        self._background.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Background sync failed: %s", task.exception())

    def _require_ready(self) -> None:
        if self._phase in (SyncPhase.UNINITIALIZED, SyncPhase.LOADING, SyncPhase.MIGRATING):
            raise RuntimeError("SyncController is not ready; call start() first")

    def _is_elevated(self, elevated: Optional[bool]) -> bool:
        return self._session.is_admin if elevated is None else bool(elevated)
