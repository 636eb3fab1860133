"""
Log record data structure

One record is built per emitted log call and shared by every transport the
call fans out to.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class LogRecord:
    """
    Immutable log record.

    Contains everything a formatter needs to render a single log call.
    """

    level: int
    message: str
    arguments: Tuple[Any, ...] = ()
    timestamp: datetime = field(default_factory=datetime.now)
    name: str = ""
    level_name: str = ""

    def __post_init__(self):
        """Normalize record fields after initialization."""
        if not isinstance(self.arguments, tuple):
            object.__setattr__(self, "arguments", tuple(self.arguments))
        if not isinstance(self.message, str):
            object.__setattr__(self, "message", str(self.message))

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert log record to dictionary.

        Returns:
            Dictionary representation, arguments rendered with repr()
        """
        return {
            "level": self.level,
            "level_name": self.level_name,
            "message": self.message,
            "arguments": [repr(arg) for arg in self.arguments],
            "timestamp": self.timestamp.isoformat(),
            "name": self.name,
        }

    def __str__(self) -> str:
        """String representation."""
        return (
            f"[{self.timestamp.strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]}] "
            f"[{self.level_name or self.level:8}] "
            f"({self.name}) "
            f"{self.message}"
        )
