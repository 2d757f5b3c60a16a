import anyio
import pytest

from src.platform.scheduling.task_scheduler import AsyncioTaskScheduler


class TestAsyncioTaskScheduler:
    @pytest.mark.asyncio
    @pytest.mark.unit
    async def test_sync_callback_fires_after_delay(self) -> None:
        scheduler = AsyncioTaskScheduler()
        fired = anyio.Event()

        task = scheduler.call_later(0.01, fired.set, name='test.sync')

        with anyio.fail_after(1):
            await fired.wait()
        assert task.fired is True

    @pytest.mark.asyncio
    @pytest.mark.unit
    async def test_async_callback_is_awaited(self) -> None:
        scheduler = AsyncioTaskScheduler()
        done = anyio.Event()

        async def callback() -> None:
            await anyio.sleep(0)
            done.set()

        scheduler.call_later(0, callback)

        with anyio.fail_after(1):
            await done.wait()

    @pytest.mark.asyncio
    @pytest.mark.unit
    async def test_cancel_before_fire(self) -> None:
        scheduler = AsyncioTaskScheduler()
        calls: list[str] = []

        task = scheduler.call_later(0.02, lambda: calls.append('fired'))

        assert task.cancel() is True
        assert task.cancel() is False
        await anyio.sleep(0.05)

        assert calls == []
        assert task.cancelled is True
        assert scheduler.pending_count == 0

    @pytest.mark.asyncio
    @pytest.mark.unit
    async def test_cancel_after_fire_is_noop(self) -> None:
        scheduler = AsyncioTaskScheduler()
        fired = anyio.Event()

        task = scheduler.call_later(0, fired.set)
        with anyio.fail_after(1):
            await fired.wait()

        assert task.cancel() is False
        assert task.cancelled is False

    @pytest.mark.asyncio
    @pytest.mark.unit
    async def test_failing_callback_does_not_break_scheduler(self) -> None:
        scheduler = AsyncioTaskScheduler()
        fired = anyio.Event()

        def explode() -> None:
            raise RuntimeError('boom')

        scheduler.call_later(0, explode)
        scheduler.call_later(0.01, fired.set)

        with anyio.fail_after(1):
            await fired.wait()
