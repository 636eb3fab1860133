"""
TCP transport for centralized logging

Streams records to a remote collector over a TCP connection opened with
asyncio.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import replace
from typing import Optional

from relaylog.core.level_gate import ALL, EnabledLevels
from relaylog.core.level_set import LevelSet
from relaylog.formatters.base_formatter import Formatter
from relaylog.transports.connection_stats import ConnectionStats
from relaylog.transports.writer_transport import WriterTransport


class TcpTransport(WriterTransport):
    """
    TCP-based log transport with ordered delivery.

    The connection is opened by init(). A connection attempt that does not
    finish within ``timeout`` seconds fails with ConnectionError.

    Example:
        tcp = TcpTransport(DEFAULT_LEVELS, host="log-collector", port=5140)
        await logger.use(tcp)
    """

    def __init__(
        self,
        levels: LevelSet,
        host: str,
        port: int,
        timeout: float = 5.0,
        enabled: EnabledLevels = ALL,
        formatter: Optional[Formatter] = None,
    ):
        """
        Initialize TCP transport.

        Args:
            levels: Level set of the logger this transport will serve
            host: Remote host address
            port: Remote port number
            timeout: Connection timeout in seconds
            enabled: Levels this transport writes (default: all)
            formatter: Record formatter
        """
        super().__init__(levels, close=True, enabled=enabled, formatter=formatter)
        self.host = host
        self.port = port
        self.timeout = timeout
        self._stats = ConnectionStats()

    async def init(self) -> None:
        """
        Connect to the remote host and initialize.

        Raises:
            ConnectionError: If the connection fails or times out
        """
        self._check_can_init()
        started = time.monotonic()
        try:
            _, writer = await asyncio.wait_for(
                asyncio.open_connection(self.host, self.port), self.timeout
            )
        except asyncio.TimeoutError:
            self._stats.record_failure("connect timeout")
            raise ConnectionError(
                f"Timed out connecting to {self.host}:{self.port}"
            ) from None
        except OSError as e:
            self._stats.record_failure(str(e))
            raise

        self._stats.record_connect(started)
        self.set_stream(writer)
        await super().init()

    async def handle(self, data: bytes) -> None:
        """Send data over the connection."""
        try:
            await super().handle(data)
        except OSError as e:
            self._stats.record_failure(str(e))
            self._stats.record_disconnect()
            raise
        self._stats.record_sent(len(data))

    async def close(self) -> None:
        self._stats.record_disconnect()
        await super().close()

    def get_stats(self) -> ConnectionStats:
        """
        Get connection statistics.

        Returns:
            Copy of current connection statistics
        """
        return replace(self._stats)
