"""
Transport base class

A transport is a log destination with its own level gate, a lifecycle
(unconfigured -> initialized -> disposed) and a private write queue that
keeps its writes in submission order.
"""

from __future__ import annotations

import inspect
from typing import Any, Optional

from relaylog.core.exceptions import AlreadyDisposedError, TransportStateError
from relaylog.core.level_gate import ALL, EnabledLevels, LevelGate
from relaylog.core.level_set import LevelSet
from relaylog.core.log_record import LogRecord
from relaylog.core.task_queue import TaskQueue
from relaylog.formatters.base_formatter import render_message

REQUIRED_METHODS = ("init", "dispose", "push", "enable", "disable", "emits")
REQUIRED_FLAGS = ("initialized", "disposed", "levels")


class TransportBase(LevelGate):
    """
    Base class for log transports.

    Subclasses implement handle() to write formatted bytes to their sink,
    and may override init()/close() to acquire and release it.

    Writes pushed before init() wait in the private queue until the
    transport is initialized.
    """

    def __init__(self, levels: LevelSet, enabled: EnabledLevels = ALL):
        """
        Initialize transport.

        Args:
            levels: Level set of the logger this transport will serve
            enabled: Levels this transport writes (default: all)
        """
        super().__init__(levels, enabled)
        self._initialized = False
        self._disposed = False
        self._queue = TaskQueue(running=False, name=type(self).__name__)

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def disposed(self) -> bool:
        return self._disposed

    @staticmethod
    def is_transport(value: Any) -> bool:
        """
        Check if a value provides the transport capabilities.

        Args:
            value: Object to check

        Returns:
            True if the object can be attached to a logger
        """
        if value is None or isinstance(value, type):
            return False
        for method in REQUIRED_METHODS:
            if not callable(getattr(value, method, None)):
                return False
        return all(hasattr(value, flag) for flag in REQUIRED_FLAGS)

    async def init(self) -> None:
        """
        Initialize the transport and start accepting writes.

        Raises:
            AlreadyDisposedError: If the transport was disposed
            TransportStateError: If the transport is already initialized
        """
        self._check_can_init()
        self._initialized = True
        self._queue.start()

    def _check_can_init(self) -> None:
        """
        Fail before a subclass acquires its sink.

        Subclasses opening files or connections in init() call this first so
        a rejected init() leaves no sink behind.
        """
        if self._disposed:
            raise AlreadyDisposedError("Transport has already been disposed of")
        if self._initialized:
            raise TransportStateError("Transport is already initialized")

    async def dispose(self) -> None:
        """
        Let queued writes finish, stop the queue and release the sink.
        """
        self._disposed = True
        if self._initialized:
            await self._queue.join()
        self._queue.stop()
        await self.close()

    async def push(self, record: LogRecord) -> Any:
        """
        Queue a record for writing.

        Levels rejected by this transport are silently skipped.

        Args:
            record: Log record to write

        Returns:
            Result of handle(), once the write has completed

        Raises:
            AlreadyDisposedError: If the transport was disposed
        """
        if self._disposed:
            raise AlreadyDisposedError("Transport has already been disposed of")
        if not self.emits(record.level):
            return None
        return await self._queue.push(self._deliver, record)

    async def _deliver(self, record: LogRecord) -> Any:
        data = await self.to_bytes(record)
        return await self.handle(data)

    async def handle(self, data: bytes) -> Any:
        """
        Write formatted data to the sink.

        Args:
            data: Formatted record
        """
        raise NotImplementedError(f"{type(self).__name__}.handle is not implemented")

    async def close(self) -> None:
        """Release the sink. Default does nothing."""
        pass

    async def to_bytes(self, record: LogRecord) -> bytes:
        """Turn a record into the bytes handed to handle()."""
        text = self.to_string(record)
        if inspect.isawaitable(text):
            text = await text
        return text.encode("utf-8")

    def to_string(self, record: LogRecord) -> str:
        """Default rendering: level name followed by the message."""
        level = record.level_name or self.level_set.name(record.level)
        return f"{level} {render_message(record)}"

    def __repr__(self) -> str:
        """String representation."""
        if self._disposed:
            state = "disposed"
        elif self._initialized:
            state = "initialized"
        else:
            state = "unconfigured"
        return f"{type(self).__name__}({state}, levels={self.enabled_names()})"
