"""Console transport writing to stdout or stderr"""

import sys
from typing import Optional

from relaylog.core.level_gate import ALL, EnabledLevels
from relaylog.core.level_set import LevelSet
from relaylog.formatters.base_formatter import Formatter
from relaylog.transports.writer_transport import WriterTransport


class ConsoleTransport(WriterTransport):
    """Write records to the process's stdout or stderr."""

    def __init__(
        self,
        levels: LevelSet,
        std: str = "out",
        enabled: EnabledLevels = ALL,
        formatter: Optional[Formatter] = None,
    ):
        """
        Initialize console transport.

        Args:
            levels: Level set of the logger this transport will serve
            std: "out" for stdout, "err" for stderr
            enabled: Levels this transport writes (default: all)
            formatter: Record formatter

        Raises:
            ValueError: If std is neither "out" nor "err"
        """
        if std not in ("out", "err"):
            raise ValueError(f"Unknown std '{std}'")
        super().__init__(levels, close=False, enabled=enabled, formatter=formatter)
        self.std = std

    async def init(self) -> None:
        """Bind the current process stream and initialize."""
        self._check_can_init()
        if self._stream is None:
            text_stream = sys.stdout if self.std == "out" else sys.stderr
            self.set_stream(getattr(text_stream, "buffer", text_stream))
        await super().init()
