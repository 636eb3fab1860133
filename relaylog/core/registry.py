"""
Logger registry

Maps logger names to Logger instances so every caller asking for the same
name shares one logger.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from relaylog.core.exceptions import LevelSetMismatchError
from relaylog.core.level_gate import ALL, EnabledLevels
from relaylog.core.level_set import DEFAULT_LEVELS, LevelSet
from relaylog.core.logger import Logger
from relaylog.core.logger_config import LoggerConfig
from relaylog.formatters.base_formatter import Formatter
from relaylog.formatters.compact_formatter import CompactFormatter
from relaylog.transports.console_transport import ConsoleTransport


class LoggerRegistry:
    """
    Name to Logger mapping, first registration wins.

    Example:
        registry = LoggerRegistry()
        app = registry.get("app")
        assert registry.get("app") is app
        await registry.dispose_all()
    """

    def __init__(self):
        self._loggers: Dict[str, Logger] = {}

    def get(
        self,
        name: str,
        levels: Optional[LevelSet] = None,
        formatter: Optional[Formatter] = None,
        enabled: EnabledLevels = ALL,
    ) -> Logger:
        """
        Get the logger registered under a name, creating it if needed.

        ``enabled`` only applies when the logger is created. A formatter
        passed for an existing logger replaces its default formatter.

        Args:
            name: Logger name
            levels: Level set (default: DEFAULT_LEVELS)
            formatter: Default formatter for transports attached later
            enabled: Initially enabled levels for a new logger

        Returns:
            The logger for this name

        Raises:
            LevelSetMismatchError: If the name exists with another level set
        """
        levels = DEFAULT_LEVELS if levels is None else levels
        logger = self._loggers.get(name)
        if logger is not None:
            if logger.level_set is not levels:
                raise LevelSetMismatchError(
                    f"Logger '{name}' already exists with levels {logger.level_set!r}, "
                    f"requested {levels!r}"
                )
            if formatter is not None:
                logger.format(formatter)
            return logger

        logger = Logger(
            LoggerConfig(name=name, levels=levels, enabled=enabled, formatter=formatter)
        )
        self._loggers[name] = logger
        return logger

    def has(self, name: str) -> bool:
        """Check whether a logger is registered under a name."""
        return name in self._loggers

    def names(self) -> List[str]:
        """Registered logger names."""
        return list(self._loggers.keys())

    def unregister(self, name: str) -> Optional[Logger]:
        """
        Forget a logger without disposing of it.

        Returns:
            The removed logger, or None if the name was unknown
        """
        return self._loggers.pop(name, None)

    async def dispose_all(self) -> None:
        """Dispose of every registered logger and clear the registry."""
        loggers, self._loggers = list(self._loggers.values()), {}
        for logger in loggers:
            await logger.dispose()

    def __contains__(self, name: str) -> bool:
        return name in self._loggers

    def __len__(self) -> int:
        return len(self._loggers)

    def __repr__(self) -> str:
        """String representation."""
        return f"LoggerRegistry(loggers={self.names()})"


_default_registry: Optional[LoggerRegistry] = None


def get_registry() -> LoggerRegistry:
    """Return the process-wide registry, creating it on first use."""
    global _default_registry
    if _default_registry is None:
        _default_registry = LoggerRegistry()
    return _default_registry


def get_logger(
    name: str,
    levels: Optional[LevelSet] = None,
    formatter: Optional[Formatter] = None,
) -> Logger:
    """Shortcut for get_registry().get(name, levels, formatter)."""
    return get_registry().get(name, levels, formatter)


DEFAULT_LOGGER_NAME = "default"


async def get_default_logger() -> Logger:
    """
    Return the ready-made default logger from the default registry.

    On first use it gets a colored console transport on stderr. Later
    calls return the same logger without attaching anything else.

    Example:
        log = await get_default_logger()
        log.info("service started on port %d", 8080)
    """
    logger = get_registry().get(DEFAULT_LOGGER_NAME)
    if not logger.transports:
        await logger.use(
            ConsoleTransport(
                DEFAULT_LEVELS, std="err", formatter=CompactFormatter(colored=True)
            )
        )
    return logger
