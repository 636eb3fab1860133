"""
Logger exception hierarchy

Configuration errors are raised synchronously from the call that caused
them. Delivery failures never surface here; they go to the logger's
error channel instead.
"""


class LoggerError(Exception):
    """Base class for all logger errors."""


class UnknownLevelError(LoggerError, ValueError):
    """A level name or index does not belong to the bound level set."""

    def __init__(self, level):
        super().__init__(f"Unknown level '{level}'")
        self.level = level


class NotATransportError(LoggerError, TypeError):
    """Object passed to use() lacks the transport capabilities."""


class TransportStateError(LoggerError, RuntimeError):
    """Transport lifecycle method called in the wrong state."""


class AlreadyDisposedError(TransportStateError):
    """Transport has already been disposed of."""


class NotReadyError(TransportStateError):
    """Transport cannot initialize because its sink is missing."""


class LevelSetMismatchError(LoggerError, ValueError):
    """Existing logger was requested with a different level set."""


class WebhookError(LoggerError, ConnectionError):
    """Webhook endpoint rejected a message."""
