"""
Compact formatter for minimal log output

Produces concise single-line log records
"""

from typing import Dict, Optional

from relaylog.core.log_record import LogRecord
from relaylog.formatters.base_formatter import BaseFormatter, render_message
from relaylog.formatters.colors import BOLD, DIM, RESET, colorize

DEFAULT_PREFIXES: Dict[str, str] = {
    "trace": "trac",
    "debug": "dbug",
    "info": "info",
    "notice": "Note",
    "warn": "WARN",
    "error": "ERR!",
    "critical": "CRIT",
}


class CompactFormatter(BaseFormatter):
    """
    Format log records in a compact single-line format.

    Output: ``[19/10/2026 14:03:11] (app) WARN disk almost full``
    """

    def __init__(self, colored: bool = False, prefixes: Optional[Dict[str, str]] = None):
        """
        Initialize compact formatter.

        Args:
            colored: Use ANSI colors for the date, logger name and prefix
            prefixes: Level name to prefix mapping (default: 4-char prefixes)
        """
        self.colored = colored
        self.prefixes = dict(DEFAULT_PREFIXES if prefixes is None else prefixes)

    def format(self, record: LogRecord) -> str:
        """
        Format log record in compact format.

        Args:
            record: Log record to format

        Returns:
            Compact formatted string
        """
        ts = record.timestamp
        date = ts.strftime("%d/%m/%Y")
        time = ts.strftime("%H:%M:%S")
        prefix = self.prefixes.get(record.level_name, record.level_name[:4])
        name = record.name

        if self.colored:
            date = date.replace("/", f"{DIM}/{RESET}")
            time = time.replace(":", f"{DIM}:{RESET}")
            name = f"{BOLD}{name}{RESET}"
            prefix = colorize(prefix, record.level_name)

        return f"[{date} {time}] ({name}) {prefix} {render_message(record)}"

    def __repr__(self) -> str:
        """String representation."""
        return f"CompactFormatter(colored={self.colored})"
