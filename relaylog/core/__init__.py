"""
Core module for logger system

This module contains the fundamental classes:
- Logger: Main logger class
- LoggerBuilder: Builder pattern for logger construction
- LoggerRegistry: Name to logger lookup
- LogRecord: Log record data structure
- LevelSet / LevelGate: Level definitions and enabled-level masks
- LoggerConfig: Configuration management
"""

from relaylog.core.exceptions import (
    AlreadyDisposedError,
    LevelSetMismatchError,
    LoggerError,
    NotATransportError,
    NotReadyError,
    TransportStateError,
    UnknownLevelError,
    WebhookError,
)
from relaylog.core.level_set import DEFAULT_LEVELS, MAX_LEVELS, SYSLOG_LEVELS, LevelSet
from relaylog.core.level_gate import ALL, LevelGate
from relaylog.core.log_record import LogRecord
from relaylog.core.logger_config import LoggerConfig
from relaylog.core.task_queue import TaskQueue
from relaylog.core.events import ErrorChannel
from relaylog.core.logger import Logger
from relaylog.core.registry import (
    LoggerRegistry,
    get_default_logger,
    get_logger,
    get_registry,
)
from relaylog.core.logger_builder import LoggerBuilder

__all__ = [
    "ALL",
    "AlreadyDisposedError",
    "DEFAULT_LEVELS",
    "ErrorChannel",
    "LevelGate",
    "LevelSet",
    "LevelSetMismatchError",
    "LogRecord",
    "Logger",
    "LoggerBuilder",
    "LoggerConfig",
    "LoggerError",
    "LoggerRegistry",
    "MAX_LEVELS",
    "NotATransportError",
    "NotReadyError",
    "SYSLOG_LEVELS",
    "TaskQueue",
    "TransportStateError",
    "UnknownLevelError",
    "WebhookError",
    "get_default_logger",
    "get_logger",
    "get_registry",
]
