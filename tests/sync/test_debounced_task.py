from __future__ import annotations

import asyncio

from src.attendance_register.attendance_register.sync.scheduler import DebouncedTask


def test_rearming_replaces_scheduled_run():
    async def main():
        runs = []

        async def action():
            runs.append(asyncio.get_running_loop().time())

        task = DebouncedTask(asyncio.get_running_loop(), 0.05, action)
        for _ in range(3):
            task.arm()
            await asyncio.sleep(0.02)

        await asyncio.sleep(0.1)
        await task.drain()
        assert len(runs) == 1
        assert not task.pending

    asyncio.run(main())


def test_cancel_drops_scheduled_run():
    async def main():
        runs = []

        async def action():
            runs.append(1)

        task = DebouncedTask(asyncio.get_running_loop(), 0.02, action)
        task.arm()
        task.cancel()
        await asyncio.sleep(0.05)

        assert runs == []

    asyncio.run(main())


def test_flush_fires_immediately_and_only_when_pending():
    async def main():
        runs = []

        async def action():
            runs.append(1)

        task = DebouncedTask(asyncio.get_running_loop(), 10, action)
        task.flush()
        task.arm()
        task.flush()
        await task.drain()

        assert runs == [1]
        assert not task.pending

    asyncio.run(main())


def test_failing_action_does_not_break_later_runs():
    async def main():
        calls = []

        async def action():
            calls.append(1)
            if len(calls) == 1:
                raise RuntimeError("boom")

        task = DebouncedTask(asyncio.get_running_loop(), 0.01, action)
        task.arm()
        await asyncio.sleep(0.05)
        task.arm()
        await asyncio.sleep(0.05)
        await task.drain()

        assert len(calls) == 2

    asyncio.run(main())
