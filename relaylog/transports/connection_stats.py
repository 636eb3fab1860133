"""Delivery statistics for transports with a remote endpoint"""

import time
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class ConnectionStats:
    """
    Counters kept by the TCP and webhook transports.

    ``connect_time_ms`` is how long the last successful init() took to reach
    the endpoint. ``throttled`` and ``throttle_seconds`` count the pauses a
    transport inserted after sends to stay under the endpoint's rate limit.
    """

    messages_sent: int = 0
    messages_failed: int = 0
    bytes_sent: int = 0
    last_error: Optional[str] = None
    last_error_at: Optional[datetime] = None
    connected_at: Optional[datetime] = None
    connect_time_ms: Optional[float] = None
    is_connected: bool = False
    throttled: int = 0
    throttle_seconds: float = 0.0

    def record_connect(self, started: float) -> None:
        """Mark the endpoint reachable; ``started`` is a time.monotonic() value."""
        self.connect_time_ms = (time.monotonic() - started) * 1000
        self.connected_at = datetime.now()
        self.is_connected = True

    def record_disconnect(self) -> None:
        self.is_connected = False

    def record_sent(self, bytes_count: int) -> None:
        self.messages_sent += 1
        self.bytes_sent += bytes_count

    def record_failure(self, error: str) -> None:
        """Record a failed connect or send."""
        self.messages_failed += 1
        self.last_error = error
        self.last_error_at = datetime.now()

    def record_throttle(self, seconds: float) -> None:
        self.throttled += 1
        self.throttle_seconds += seconds

    @property
    def success_rate(self) -> Optional[float]:
        """Share of attempts that succeeded, None before the first attempt."""
        attempts = self.messages_sent + self.messages_failed
        if not attempts:
            return None
        return self.messages_sent / attempts

    def to_dict(self) -> dict:
        """JSON-friendly view, e.g. for a health endpoint."""
        return {
            "messages_sent": self.messages_sent,
            "messages_failed": self.messages_failed,
            "bytes_sent": self.bytes_sent,
            "success_rate": self.success_rate,
            "last_error": self.last_error,
            "last_error_at": self.last_error_at.isoformat() if self.last_error_at else None,
            "connected_at": self.connected_at.isoformat() if self.connected_at else None,
            "connect_time_ms": self.connect_time_ms,
            "is_connected": self.is_connected,
            "throttled": self.throttled,
            "throttle_seconds": self.throttle_seconds,
        }
