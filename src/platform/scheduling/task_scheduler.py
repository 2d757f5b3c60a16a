"""
Task Scheduler

Delayed one-shot callbacks for debounce/throttle timers.

Pattern:
- call_later() spawns a fire-and-forget asyncio task
- the task sleeps with anyio, then runs the callback (sync or async)
- cancel() before the sleep ends drops the callback; once fired it is a no-op
"""

from abc import ABC, abstractmethod
import asyncio
import inspect
from typing import Any, Awaitable, Callable, Optional, Union

import anyio

from src.platform.logging.loguru_io import Logger


TaskCallback = Callable[[], Union[None, Awaitable[Any]]]


class ScheduledTask(ABC):
    @property
    @abstractmethod
    def fired(self) -> bool:
        pass

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        pass

    @abstractmethod
    def cancel(self) -> bool:
        """Cancel the callback. Returns False if it already fired or was cancelled."""
        pass


class ITaskScheduler(ABC):
    @abstractmethod
    def now(self) -> float:
        """Monotonic clock in seconds"""
        pass

    @abstractmethod
    def call_later(
        self, delay: float, callback: TaskCallback, *, name: Optional[str] = None
    ) -> ScheduledTask:
        pass


class AsyncioScheduledTask(ScheduledTask):
    def __init__(self, *, delay: float, callback: TaskCallback, name: Optional[str]) -> None:
        self._delay = delay
        self._callback = callback
        self._name = name or getattr(callback, '__qualname__', 'scheduled_task')
        self._fired = False
        self._cancelled = False
        self._task: asyncio.Task[None] = asyncio.create_task(self._run(), name=self._name)

    @property
    def fired(self) -> bool:
        return self._fired

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def task(self) -> 'asyncio.Task[None]':
        return self._task

    async def _run(self) -> None:
        await anyio.sleep(self._delay)
        self._fired = True
        try:
            result = self._callback()
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            Logger.base.warning(f'⚠️ [SCHEDULER] Task {self._name} failed: {e}')

    def cancel(self) -> bool:
        if self._fired or self._cancelled:
            return False
        self._cancelled = True
        self._task.cancel()
        return True


class AsyncioTaskScheduler(ITaskScheduler):
    """
    Scheduler backed by the running asyncio loop.

    Must be used from inside the running loop (anyio on the asyncio backend).
    Strong references are kept until each task finishes so pending timers are not collected.
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[None]] = set()

    def now(self) -> float:
        return asyncio.get_running_loop().time()

    def call_later(
        self, delay: float, callback: TaskCallback, *, name: Optional[str] = None
    ) -> ScheduledTask:
        scheduled = AsyncioScheduledTask(delay=max(delay, 0.0), callback=callback, name=name)
        self._tasks.add(scheduled.task)
        scheduled.task.add_done_callback(self._tasks.discard)
        return scheduled

    @property
    def pending_count(self) -> int:
        return len(self._tasks)
