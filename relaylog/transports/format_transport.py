"""Transport with a replaceable formatter"""

from __future__ import annotations

import inspect
from typing import Optional, Union

from relaylog.core.level_gate import ALL, EnabledLevels
from relaylog.core.level_set import LevelSet
from relaylog.core.log_record import LogRecord
from relaylog.formatters.base_formatter import Formatter
from relaylog.transports.transport_base import TransportBase


class FormatTransport(TransportBase):
    """
    Transport base with a formatter slot.

    A logger attaching this transport fills an empty slot with its own
    default formatter.
    """

    def __init__(
        self,
        levels: LevelSet,
        enabled: EnabledLevels = ALL,
        formatter: Optional[Formatter] = None,
    ):
        """
        Initialize format transport.

        Args:
            levels: Level set of the logger this transport will serve
            enabled: Levels this transport writes (default: all)
            formatter: Formatter for records (default: level name + message)
        """
        super().__init__(levels, enabled)
        self._formatter = formatter

    def format(self, formatter: Optional[Formatter] = None) -> Union["FormatTransport", Formatter, None]:
        """
        Get or set the formatter.

        Called without arguments, returns the current formatter (or None).
        Called with a formatter, sets it and returns self.
        """
        if formatter is None:
            return self._formatter
        if not callable(formatter):
            raise TypeError("formatter must be callable")
        self._formatter = formatter
        return self

    async def to_bytes(self, record: LogRecord) -> bytes:
        """Format with the configured formatter, or the base rendering."""
        if self._formatter is None:
            return await super().to_bytes(record)
        result = self._formatter(record)
        if inspect.isawaitable(result):
            result = await result
        if isinstance(result, str):
            return result.encode("utf-8")
        return bytes(result)
