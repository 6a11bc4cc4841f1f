from __future__ import annotations

import asyncio

import pytest

from src.attendance_register.attendance_register.core.constants import PERCENT_COLUMN_ID
from src.attendance_register.attendance_register.core.enums import SyncPhase, SyncStatus
from src.attendance_register.attendance_register.document.seed import seed_document
from fakes import FakeSheet, InMemoryStore, make_controller

ENDPOINT = "https://script.test/exec"


def test_fresh_start_without_endpoint_is_ready_and_never_syncs():
    async def main():
        controller, _, store, sheet = make_controller()
        seen = []
        controller.status.subscribe(lambda s: seen.append(s.status))

        doc = await controller.start()
        await controller.wait_for_background()

        assert controller.phase == SyncPhase.READY
        assert doc == seed_document()
        assert controller.status.status == SyncStatus.IDLE
        assert SyncStatus.SYNCING not in seen
        assert sheet.gets == 0
        assert store.saves == [doc]
        await controller.close()

    asyncio.run(main())


def test_legacy_document_is_migrated_and_saved_before_ready():
    legacy = seed_document().with_columns([c for c in seed_document().columns if c.id != PERCENT_COLUMN_ID])

    async def main():
        controller, _, store, _ = make_controller(store=InMemoryStore(legacy))
        doc = await controller.start()

        assert [c.id for c in doc.columns][:2] == ["col_name", PERCENT_COLUMN_ID]
        assert store.document == doc
        await controller.close()

    asyncio.run(main())


def test_failed_load_starts_from_seed_without_overwriting_store():
    async def main():
        controller, _, store, _ = make_controller(store=InMemoryStore(fail_load=True))
        doc = await controller.start()

        assert doc == seed_document()
        assert controller.phase == SyncPhase.READY
        assert store.saves == []
        await controller.close()

    asyncio.run(main())


def test_local_document_is_published_before_background_pull():
    remote = seed_document().with_title("Dari Sheet").to_dict()

    async def main():
        controller, _, _, sheet = make_controller(sheet=FakeSheet(remote), endpoint=ENDPOINT)

        doc = await controller.start()
        assert doc.title == seed_document().title

        await controller.wait_for_background()
        assert sheet.gets == 1
        assert controller.document.title == "Dari Sheet"
        assert controller.status.status == SyncStatus.SUCCESS
        await controller.close()

    asyncio.run(main())


def test_start_twice_is_rejected():
    async def main():
        controller, _, _, _ = make_controller()
        await controller.start()
        with pytest.raises(RuntimeError):
            await controller.start()
        await controller.close()

    asyncio.run(main())


def test_commit_before_start_is_rejected():
    controller, _, _, _ = make_controller()

    with pytest.raises(RuntimeError):
        controller.commit(seed_document())


def test_startup_pull_takes_title_and_matrix_but_keeps_local_shape():
    remote = {"title": "X", "columns": [], "teachers": [], "data": {"t1": {"c1": "Hadir"}}}

    async def main():
        controller, _, store, _ = make_controller(sheet=FakeSheet(remote), endpoint=ENDPOINT)
        await controller.start()
        await controller.wait_for_background()

        doc = controller.document
        assert doc.title == "X"
        assert doc.columns == seed_document().columns
        assert doc.teachers == seed_document().teachers
        assert doc.data == {"t1": {"c1": "Hadir"}}
        assert store.document == doc
        await controller.close()

    asyncio.run(main())
