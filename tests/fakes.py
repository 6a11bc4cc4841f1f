from __future__ import annotations

import json
from typing import Optional

import httpx

from src.attendance_register.attendance_register.core.constants import PREF_ADMIN_AUTH
from src.attendance_register.attendance_register.core.exceptions import StorageError
from src.attendance_register.attendance_register.document.model import Document
from src.attendance_register.attendance_register.document.seed import seed_document
from src.attendance_register.attendance_register.remote.client import RemoteDocumentClient
from src.attendance_register.attendance_register.session.service import AuthService, SessionService
from src.attendance_register.attendance_register.storage.repository import LoadResult
from src.attendance_register.attendance_register.sync.controller import SyncController


class InMemoryStore:
    def __init__(self, document: Optional[Document] = None, *, fail_load: bool = False):
        self.document = document
        self.fail_load = fail_load
        self.saves: list[Document] = []

    def load(self) -> LoadResult:
        if self.fail_load:
            return LoadResult(document=seed_document(), error=StorageError("disk gone"))
        return LoadResult(document=self.document if self.document is not None else seed_document())

    def save(self, document: Document):
        self.saves.append(document)
        self.document = document
        return None


class InMemoryPreferences:
    def __init__(self, values: Optional[dict[str, str]] = None):
        self.values = dict(values or {})

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value

    def delete(self, key: str) -> None:
        self.values.pop(key, None)


class FakeSheet:
    """Spreadsheet script endpoint answering GET (pull) and POST (push)."""

    def __init__(
        self,
        stored: Optional[dict] = None,
        *,
        pull_error: Optional[str] = None,
        push_error: Optional[str] = None,
        network_down: bool = False,
    ):
        self.stored = stored
        self.pull_error = pull_error
        self.push_error = push_error
        self.network_down = network_down
        self.gets = 0
        self.pushes: list[dict] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        if self.network_down:
            raise httpx.ConnectError("network unreachable", request=request)

        if request.method == "GET":
            self.gets += 1
            if self.pull_error:
                return httpx.Response(200, json={"status": "error", "message": self.pull_error})
            if self.stored is None:
                return httpx.Response(200, json={"status": "error", "message": "Sheet DB belum diinisialisasi."})
            return httpx.Response(200, json={"status": "success", "data": self.stored})

        payload = json.loads(request.content)
        self.pushes.append(payload)
        if self.push_error:
            return httpx.Response(200, json={"status": "error", "message": self.push_error})
        self.stored = {k: payload[k] for k in ("title", "columns", "teachers", "data")}
        return httpx.Response(200, json={"status": "success"})

    def client(self) -> RemoteDocumentClient:
        return RemoteDocumentClient(transport=httpx.MockTransport(self.handler))


def make_controller(
    *,
    store: Optional[InMemoryStore] = None,
    sheet: Optional[FakeSheet] = None,
    admin: bool = False,
    endpoint: Optional[str] = None,
    debounce: float = 0.05,
    reset: float = 0.1,
) -> tuple[SyncController, SessionService, InMemoryStore, FakeSheet]:
    prefs = InMemoryPreferences({PREF_ADMIN_AUTH: "true"} if admin else {})
    session = SessionService(prefs, AuthService("admin123"), default_endpoint=endpoint)
    store = store or InMemoryStore()
    sheet = sheet or FakeSheet()
    controller = SyncController(
        store,
        sheet.client(),
        session,
        debounce_seconds=debounce,
        status_reset_seconds=reset,
        push_reset_seconds=reset,
    )
    return controller, session, store, sheet
