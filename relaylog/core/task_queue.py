"""
Serial task queue

Runs submitted tasks one at a time, in submission order, on the running
asyncio event loop. Used for the per-transport write queues and for the
logger's per-transport delivery lanes.
"""

from __future__ import annotations

import asyncio
import inspect
import sys
from collections import deque
from typing import Any, Callable, Deque, List, Optional, Tuple


class TaskQueue:
    """
    FIFO queue of callables executed by a single worker task.

    Task k+1 never starts before task k has finished, whether it succeeded
    or failed. A stopped queue keeps accepting tasks but does not start new
    ones until start() is called; a task already running is never cancelled.

    Example:
        queue = TaskQueue()
        queue.submit(writer.write, b"first")
        result = await queue.push(writer.write, b"second")
        await queue.join()
    """

    def __init__(
        self,
        running: bool = True,
        name: str = "",
        on_error: Optional[Callable[[Exception], Any]] = None,
    ):
        """
        Initialize task queue.

        Args:
            running: Start executing tasks as soon as they are submitted
            name: Name used in error reports and repr()
            on_error: Called with the exception of a failed submit()-ed task
        """
        self.name = name
        self._on_error = on_error
        self._running = running
        self._tasks: Deque[Tuple[Callable, tuple, Optional[asyncio.Future]]] = deque()
        self._worker: Optional[asyncio.Task] = None
        self._busy = False
        self._waiters: List[asyncio.Future] = []

    @property
    def running(self) -> bool:
        """Whether the queue executes tasks."""
        return self._running

    @property
    def pending(self) -> int:
        """Number of tasks waiting to run."""
        return len(self._tasks)

    def submit(self, fn: Callable, *args) -> None:
        """
        Append a task without waiting for it.

        Never suspends. Outside a running event loop the task stays queued
        until the queue is next kicked from inside one.
        """
        self._tasks.append((fn, args, None))
        self._kick()

    async def push(self, fn: Callable, *args) -> Any:
        """
        Append a task and wait for its result.

        Returns:
            The task's return value (awaited if awaitable)

        Raises:
            Exception: Whatever the task raised
        """
        future = asyncio.get_running_loop().create_future()
        self._tasks.append((fn, args, future))
        self._kick()
        return await future

    def start(self) -> None:
        """Resume executing tasks."""
        self._running = True
        self._kick()

    def stop(self) -> None:
        """Stop starting new tasks; the running task completes."""
        self._running = False

    async def join(self) -> None:
        """Wait until the queue is idle."""
        self._kick()
        while self._busy or (self._running and self._tasks):
            waiter = asyncio.get_running_loop().create_future()
            self._waiters.append(waiter)
            await waiter

    def _kick(self) -> None:
        if not self._running or not self._tasks:
            return
        if self._worker is not None and not self._worker.done():
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        self._worker = loop.create_task(self._run())

    async def _run(self) -> None:
        try:
            while self._running and self._tasks:
                fn, args, future = self._tasks.popleft()
                self._busy = True
                try:
                    result = fn(*args)
                    if inspect.isawaitable(result):
                        result = await result
                except Exception as e:
                    if future is not None:
                        if not future.done():
                            future.set_exception(e)
                    else:
                        self._report(e)
                else:
                    if future is not None and not future.done():
                        future.set_result(result)
                finally:
                    self._busy = False
        finally:
            self._worker = None
            waiters, self._waiters = self._waiters, []
            for waiter in waiters:
                if not waiter.done():
                    waiter.set_result(None)

    def _report(self, error: Exception) -> None:
        if self._on_error is not None:
            try:
                self._on_error(error)
                return
            except Exception as e:
                error = e
        print(f"Task queue '{self.name}' error: {error!r}", file=sys.stderr)

    def __repr__(self) -> str:
        """String representation."""
        state = "running" if self._running else "stopped"
        return f"TaskQueue(name='{self.name}', {state}, pending={len(self._tasks)})"
