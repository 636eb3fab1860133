"""
Text formatter with customizable template

Formats log records using a template string with placeholders
"""

from relaylog.core.log_record import LogRecord
from relaylog.formatters.base_formatter import BaseFormatter, render_message
from relaylog.formatters.colors import colorize


class TextFormatter(BaseFormatter):
    """
    Format log records using a customizable template.

    Supports placeholders for all LogRecord fields.
    """

    DEFAULT_TEMPLATE = "[{timestamp}] [{level:8}] ({name}) {message}"

    def __init__(
        self,
        template: str = None,
        timestamp_format: str = "%Y-%m-%d %H:%M:%S.%f",
        colored: bool = False,
    ):
        """
        Initialize text formatter.

        Args:
            template: Format template with placeholders.
                     Available placeholders:
                     - {timestamp}: Timestamp
                     - {level}: Level name
                     - {level:8}: Level name with padding
                     - {level_index}: Level index
                     - {name}: Logger name
                     - {message}: Message with arguments interpolated
            timestamp_format: strftime format for timestamps
            colored: Color the level name with ANSI codes

        Example:
            # Default format
            formatter = TextFormatter()

            # Custom format
            formatter = TextFormatter("{level} - {message}")
        """
        self.template = template or self.DEFAULT_TEMPLATE
        self.timestamp_format = timestamp_format
        self.colored = colored

    def format(self, record: LogRecord) -> str:
        """
        Format log record using the template.

        Args:
            record: Log record to format

        Returns:
            Formatted string
        """
        timestamp_str = record.timestamp.strftime(self.timestamp_format)
        if self.timestamp_format.endswith("%f"):
            timestamp_str = timestamp_str[:-3]  # Milliseconds

        level = record.level_name or str(record.level)
        if self.colored:
            # Pad before coloring so escape codes do not count as width
            level = colorize(f"{level:8}", record.level_name)

        format_dict = {
            "timestamp": timestamp_str,
            "level": level,
            "level_index": record.level,
            "name": record.name,
            "message": render_message(record),
        }

        try:
            return self.template.format(**format_dict)
        except KeyError as e:
            # Fallback if template has unknown placeholder
            return f"[FORMAT ERROR: {e}] {format_dict['message']}"

    def __repr__(self) -> str:
        """String representation."""
        return f"TextFormatter(template='{self.template}')"
