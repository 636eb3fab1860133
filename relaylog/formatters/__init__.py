"""
Log formatters module

Provides various formatter implementations for controlling log output format.
"""

from relaylog.formatters.base_formatter import (
    BaseFormatter,
    Formatter,
    as_string,
    render_message,
)
from relaylog.formatters.text_formatter import TextFormatter
from relaylog.formatters.json_formatter import JSONFormatter
from relaylog.formatters.compact_formatter import CompactFormatter

__all__ = [
    "BaseFormatter",
    "Formatter",
    "TextFormatter",
    "JSONFormatter",
    "CompactFormatter",
    "as_string",
    "render_message",
]
