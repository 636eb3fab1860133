"""
Main Logger class - fan-out of log records to transports

A log call builds one LogRecord and hands it to every attached transport
whose level gate admits it. Each transport gets its own delivery lane, so a
slow destination never holds up the others while its own writes stay in
call order.
"""

from __future__ import annotations

import inspect
from collections import deque
from typing import Any, Callable, Deque, Dict, Optional, Tuple

from relaylog.core.events import ErrorChannel
from relaylog.core.exceptions import AlreadyDisposedError, NotATransportError
from relaylog.core.level_gate import LevelGate
from relaylog.core.level_set import LevelRef, LevelSet
from relaylog.core.log_record import LogRecord
from relaylog.core.logger_config import LoggerConfig
from relaylog.core.task_queue import TaskQueue
from relaylog.formatters.base_formatter import Formatter
from relaylog.transports.transport_base import TransportBase


class Logger(LevelGate):
    """
    Named logger with one method per level of its level set.

    Example:
        logger = Logger(LoggerConfig(name="app"))
        await logger.use(ConsoleTransport(DEFAULT_LEVELS))
        logger.info("Hello %s", "world").warn("disk at %d%%", 91)
        await logger.flush()
        await logger.dispose()
    """

    def __init__(self, config: Optional[LoggerConfig] = None):
        self._config = config or LoggerConfig.default()
        super().__init__(self._config.levels, self._config.enabled)
        self._default_formatter = self._config.formatter
        # Attached transports, in insertion order, each with its delivery lane
        self._transports: Dict[Any, TaskQueue] = {}
        self._suspended = False
        self._suspension_buffer: Deque[LogRecord] = deque()
        self._metrics = {
            "logged": 0,
            "filtered": 0,
            "buffered": 0,
            "delivered": 0,
            "errors": 0,
        }
        self.on_error = ErrorChannel()
        self._level_methods: Dict[str, Callable[..., "Logger"]] = self._build_level_methods()

    @classmethod
    def get(
        cls,
        name: str,
        levels: Optional[LevelSet] = None,
        formatter: Optional[Formatter] = None,
    ) -> "Logger":
        """
        Get or create a logger from the default registry.

        Raises:
            LevelSetMismatchError: If the name is registered with other levels
        """
        from relaylog.core.registry import get_registry

        return get_registry().get(name, levels, formatter)

    def _build_level_methods(self) -> Dict[str, Callable[..., "Logger"]]:
        # Aliases get their own method, bound to the canonical level
        entries = list(enumerate(self.level_set.names))
        entries += [
            (self.level_set.index(alias), alias) for alias in self.level_set.aliases
        ]
        methods = {}
        for index, level_name in entries:
            if hasattr(type(self), level_name) or level_name.startswith("_"):
                raise ValueError(
                    f"Level name '{level_name}' collides with a Logger attribute"
                )
            methods[level_name] = self._make_level_method(index, level_name)
        return methods

    def _make_level_method(self, index: int, method_name: str) -> Callable[..., "Logger"]:
        def log_at_level(message: str, *args: Any) -> "Logger":
            return self._log(index, message, args)

        log_at_level.__name__ = method_name
        return log_at_level

    def __getattr__(self, attr: str):
        methods = self.__dict__.get("_level_methods")
        if methods is not None and attr in methods:
            return methods[attr]
        raise AttributeError(f"'{type(self).__name__}' object has no attribute '{attr}'")

    def __dir__(self):
        return list(super().__dir__()) + list(self.__dict__.get("_level_methods", ()))

    @property
    def name(self) -> str:
        return self._config.name

    @property
    def suspended(self) -> bool:
        return self._suspended

    @property
    def transports(self) -> Tuple[Any, ...]:
        """Attached transports in the order they were added."""
        return tuple(self._transports)

    def log(self, level: LevelRef, message: str, *args: Any) -> "Logger":
        """
        Log a message at the given level.

        Args:
            level: Level name, alias or index
            message: printf-style message template
            args: Values for the template

        Returns:
            Self for method chaining

        Raises:
            UnknownLevelError: If the level is not in the level set
        """
        return self._log(self.level_set.index(level), message, args)

    def _log(self, level: int, message: str, args: Tuple[Any, ...]) -> "Logger":
        if not self.emits(level):
            self._metrics["filtered"] += 1
            return self

        # Built once so every transport sees the same timestamp and arguments
        record = LogRecord(
            level=level,
            message=message,
            arguments=args,
            name=self.name,
            level_name=self.level_set.names[level],
        )
        self._metrics["logged"] += 1

        if self._suspended:
            self._suspension_buffer.append(record)
            self._metrics["buffered"] += 1
        else:
            self._dispatch(record)
        return self

    def _dispatch(self, record: LogRecord) -> None:
        """Submit one delivery per admitting transport. Never suspends."""
        for transport, lane in list(self._transports.items()):
            if transport.disposed:
                continue
            try:
                admitted = transport.emits(record.level)
            except Exception as e:
                self._report(e)
                continue
            if admitted:
                lane.submit(self._deliver, transport, record)

    async def _deliver(self, transport: Any, record: LogRecord) -> None:
        try:
            result = transport.push(record)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            self._report(e)
        else:
            self._metrics["delivered"] += 1

    def _report(self, error: Exception) -> None:
        self._metrics["errors"] += 1
        self.on_error.dispatch(error)

    def suspend(self) -> None:
        """
        Buffer log calls instead of delivering them.

        Buffered records are delivered, in call order, by resume().
        """
        self._suspended = True

    def resume(self) -> None:
        """Deliver buffered records in call order and stop buffering."""
        while self._suspension_buffer:
            self._dispatch(self._suspension_buffer.popleft())
        self._suspended = False

    async def use(self, *transports: Any) -> "Logger":
        """
        Initialize and attach transports.

        Transports without a formatter get the logger's default formatter.
        Attaching an already attached transport does nothing.

        Raises:
            NotATransportError: If an object lacks transport capabilities
            AlreadyDisposedError: If a transport was disposed
        """
        for transport in transports:
            if not TransportBase.is_transport(transport):
                raise NotATransportError(f"Not a transport: {transport!r}")
            if transport.disposed:
                raise AlreadyDisposedError("Transport has already been disposed of")
            if transport in self._transports:
                continue
            if not transport.initialized:
                result = transport.init()
                if inspect.isawaitable(result):
                    await result

            format_slot = getattr(transport, "format", None)
            if (
                callable(format_slot)
                and self._default_formatter is not None
                and format_slot() is None
            ):
                format_slot(self._default_formatter)

            self._transports[transport] = TaskQueue(
                name=f"{self.name}:{type(transport).__name__}",
                on_error=self._report,
            )
        return self

    async def remove(self, *transports: Any) -> "Logger":
        """
        Detach and dispose of transports.

        Deliveries already queued for a transport complete first. Unknown
        transports are ignored; disposal errors go to the error channel.
        """
        for transport in transports:
            lane = self._transports.pop(transport, None)
            if lane is None:
                continue
            await lane.join()
            if transport.initialized and not transport.disposed:
                await self._dispose_transport(transport)
        return self

    def format(self, formatter: Optional[Formatter] = None):
        """
        Get or set the default formatter.

        The default is copied into transports when they are attached;
        changing it later does not affect attached transports.
        """
        if formatter is None:
            return self._default_formatter
        if not callable(formatter):
            raise TypeError("formatter must be callable")
        self._default_formatter = formatter
        return self

    async def flush(self) -> None:
        """Wait until every queued delivery has completed."""
        for lane in list(self._transports.values()):
            await lane.join()

    async def dispose(self) -> None:
        """
        Dispose of every attached transport.

        Queued deliveries complete first. A transport failing to dispose
        does not stop the others from being disposed.
        """
        await self.flush()
        for transport in list(self._transports):
            if not transport.disposed:
                await self._dispose_transport(transport)

    async def _dispose_transport(self, transport: Any) -> None:
        try:
            result = transport.dispose()
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            self._report(e)

    def get_metrics(self) -> dict:
        """Get logging metrics."""
        return self._metrics.copy()

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"Logger(name='{self.name}', levels={self.enabled_names()}, "
            f"transports={len(self._transports)})"
        )
