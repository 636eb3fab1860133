"""Stream writer transport"""

from __future__ import annotations

import inspect
from typing import Any, Optional

from relaylog.core.exceptions import NotReadyError, TransportStateError
from relaylog.core.level_gate import ALL, EnabledLevels
from relaylog.core.level_set import LevelSet
from relaylog.core.log_record import LogRecord
from relaylog.formatters.base_formatter import Formatter
from relaylog.transports.format_transport import FormatTransport


class WriterTransport(FormatTransport):
    """
    Write records to a binary stream.

    The stream needs a write(bytes) method. flush(), drain(), close() and
    wait_closed() are used when present, and may be coroutines, so both
    file objects and asyncio StreamWriters work.
    """

    def __init__(
        self,
        levels: LevelSet,
        stream: Any = None,
        close: bool = True,
        newline: bool = True,
        enabled: EnabledLevels = ALL,
        formatter: Optional[Formatter] = None,
    ):
        """
        Initialize writer transport.

        Args:
            levels: Level set of the logger this transport will serve
            stream: Binary output stream (may be set later with set_stream)
            close: Close the stream on dispose
            newline: Terminate every record with a newline
            enabled: Levels this transport writes (default: all)
            formatter: Record formatter
        """
        super().__init__(levels, enabled, formatter)
        self._stream = stream
        self.close_stream = close
        self.newline = newline

    @property
    def stream(self) -> Any:
        return self._stream

    def set_stream(self, stream: Any) -> "WriterTransport":
        """
        Set the output stream.

        Raises:
            TransportStateError: If a stream is already set
        """
        if self._stream is not None:
            raise TransportStateError("Stream is already set")
        self._stream = stream
        return self

    async def init(self) -> None:
        """
        Initialize the transport.

        Raises:
            NotReadyError: If no stream has been supplied
        """
        self._check_can_init()
        if self._stream is None:
            raise NotReadyError("Initialization failed, no stream found")
        await super().init()

    async def to_bytes(self, record: LogRecord) -> bytes:
        data = await super().to_bytes(record)
        if self.newline:
            data += b"\n"
        return data

    async def handle(self, data: bytes) -> None:
        """Write data to the stream."""
        await _maybe_await(self._stream.write(data))
        drain = getattr(self._stream, "drain", None)
        if drain is not None:
            await drain()
        else:
            flush = getattr(self._stream, "flush", None)
            if flush is not None:
                await _maybe_await(flush())

    async def close(self) -> None:
        """Close the stream if this transport owns it."""
        if not self.close_stream or self._stream is None:
            return
        await _maybe_await(self._stream.close())
        wait_closed = getattr(self._stream, "wait_closed", None)
        if wait_closed is not None:
            await wait_closed()


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value
