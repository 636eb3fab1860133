"""
BSD 3-Clause License

Copyright (c) 2021, 🍀☀🌕🌥 🌊
All rights reserved.

Python Relay Logger - structured logging with fan-out to pluggable transports
"""

__version__ = "1.0.0"
__author__ = "kcenon"
__email__ = "kcenon@naver.com"

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
from relaylog.core.level_set import DEFAULT_LEVELS, SYSLOG_LEVELS, LevelSet
from relaylog.core.level_gate import ALL, LevelGate
from relaylog.core.log_record import LogRecord
from relaylog.core.logger import Logger
from relaylog.core.logger_builder import LoggerBuilder
from relaylog.core.logger_config import LoggerConfig
from relaylog.core.registry import (
    LoggerRegistry,
    get_default_logger,
    get_logger,
    get_registry,
)

# Import submodules (not all classes by default)
from relaylog import formatters
from relaylog import transports

__all__ = [
    "ALL",
    "AlreadyDisposedError",
    "DEFAULT_LEVELS",
    "LevelGate",
    "LevelSet",
    "LevelSetMismatchError",
    "LogRecord",
    "Logger",
    "LoggerBuilder",
    "LoggerConfig",
    "LoggerError",
    "LoggerRegistry",
    "NotATransportError",
    "NotReadyError",
    "SYSLOG_LEVELS",
    "TransportStateError",
    "UnknownLevelError",
    "WebhookError",
    "formatters",
    "get_default_logger",
    "get_logger",
    "get_registry",
    "transports",
]
