"""
JSON formatter for structured logging

Formats log records as JSON objects
"""

import json
from relaylog.core.log_record import LogRecord
from relaylog.formatters.base_formatter import BaseFormatter, render_message


class JSONFormatter(BaseFormatter):
    """
    Format log records as JSON objects.

    Produces structured log output suitable for log aggregation systems.
    """

    def __init__(
        self,
        include_arguments: bool = True,
        indent: int = None,
        ensure_ascii: bool = False
    ):
        """
        Initialize JSON formatter.

        Args:
            include_arguments: Include the raw arguments next to the message
            indent: JSON indentation (None for compact, 2 for readable)
            ensure_ascii: Escape non-ASCII characters

        Example:
            # Compact JSON (one line per record)
            formatter = JSONFormatter()

            # Pretty-printed JSON
            formatter = JSONFormatter(indent=2)
        """
        self.include_arguments = include_arguments
        self.indent = indent
        self.ensure_ascii = ensure_ascii

    def format(self, record: LogRecord) -> str:
        """
        Format log record as JSON.

        Arguments that are not JSON serializable are written with str().

        Args:
            record: Log record to format

        Returns:
            JSON string
        """
        log_dict = {
            "timestamp": record.timestamp.isoformat(),
            "level": record.level_name,
            "level_index": record.level,
            "message": render_message(record),
        }

        if record.name:
            log_dict["logger"] = record.name

        if self.include_arguments and record.arguments:
            log_dict["arguments"] = list(record.arguments)

        return json.dumps(
            log_dict,
            indent=self.indent,
            ensure_ascii=self.ensure_ascii,
            default=str,
        )

    def __repr__(self) -> str:
        """String representation."""
        return f"JSONFormatter(indent={self.indent})"
