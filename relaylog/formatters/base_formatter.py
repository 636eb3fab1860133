"""
Base formatter interface

A formatter turns a LogRecord into text or bytes. Any callable with that
shape works, including coroutine functions; BaseFormatter is a convenience
for class-based formatters.
"""

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Union

from relaylog.core.log_record import LogRecord

FormatterResult = Union[str, bytes]
Formatter = Callable[[LogRecord], Union[FormatterResult, Awaitable[FormatterResult]]]


def as_string(value: Any) -> str:
    """Render a value for output: strings as-is, everything else via repr()."""
    if isinstance(value, str):
        return value
    return repr(value)


def render_message(record: LogRecord) -> str:
    """
    Interpolate the record's arguments into its message template.

    The message is a printf-style template. If it does not consume the
    arguments, the message and each argument are joined with spaces.

    Args:
        record: Log record to render

    Returns:
        Rendered message text
    """
    if not record.arguments:
        return record.message
    try:
        return record.message % record.arguments
    except (TypeError, ValueError, KeyError):
        return " ".join([record.message] + [as_string(a) for a in record.arguments])


class BaseFormatter(ABC):
    """
    Abstract base class for log formatters.

    Formatters convert LogRecord objects into formatted strings.
    """

    @abstractmethod
    def format(self, record: LogRecord) -> str:
        """
        Format a log record into a string.

        Args:
            record: The log record to format

        Returns:
            Formatted string representation of the log record
        """
        pass

    def __call__(self, record: LogRecord) -> str:
        """Allow formatters to be callable."""
        return self.format(record)
