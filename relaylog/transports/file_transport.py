"""File transport"""

from pathlib import Path
from typing import Optional, Union

from relaylog.core.level_gate import ALL, EnabledLevels
from relaylog.core.level_set import LevelSet
from relaylog.formatters.base_formatter import Formatter
from relaylog.transports.writer_transport import WriterTransport


class FileTransport(WriterTransport):
    """Append records to a file."""

    def __init__(
        self,
        levels: LevelSet,
        filename: Union[str, Path],
        reset: bool = False,
        enabled: EnabledLevels = ALL,
        formatter: Optional[Formatter] = None,
    ):
        """
        Initialize file transport.

        The file is opened by init(), not here.

        Args:
            levels: Level set of the logger this transport will serve
            filename: Path to log file
            reset: Truncate the file on init instead of appending
            enabled: Levels this transport writes (default: all)
            formatter: Record formatter
        """
        super().__init__(levels, close=True, enabled=enabled, formatter=formatter)
        self.filepath = Path(filename)
        self.reset = reset

    async def init(self) -> None:
        """Open the log file and initialize."""
        self._check_can_init()
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        mode = "wb" if self.reset else "ab"
        self.set_stream(open(self.filepath, mode))
        await super().init()
