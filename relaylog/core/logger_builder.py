"""Logger builder pattern"""

from pathlib import Path
from typing import Any, List, Optional, Union

from relaylog.core.level_gate import ALL
from relaylog.core.level_set import DEFAULT_LEVELS, LevelRef, LevelSet
from relaylog.core.logger import Logger
from relaylog.core.registry import LoggerRegistry, get_registry
from relaylog.formatters.base_formatter import Formatter
from relaylog.formatters.compact_formatter import CompactFormatter
from relaylog.transports.console_transport import ConsoleTransport
from relaylog.transports.file_transport import FileTransport
from relaylog.transports.tcp_transport import TcpTransport
from relaylog.transports.webhook_transport import WebhookTransport


class LoggerBuilder:
    """
    Builder pattern for logger construction.

    Transports are created when build() runs, against the chosen level set.

    Example:
        logger = await (LoggerBuilder()
            .with_name("app")
            .with_enabled("critical", "error", "warn", "info")
            .with_console(std="err")
            .with_file("logs/app.log")
            .build())
    """

    def __init__(self):
        self._name = "logger"
        self._levels: LevelSet = DEFAULT_LEVELS
        self._enabled: Any = ALL
        self._formatter: Optional[Formatter] = None
        self._registry: Optional[LoggerRegistry] = None
        self._transport_factories: List[Any] = []

    def with_name(self, name: str) -> "LoggerBuilder":
        """Set logger name."""
        self._name = name
        return self

    def with_levels(self, levels: LevelSet) -> "LoggerBuilder":
        """Set the level set."""
        self._levels = levels
        return self

    def with_enabled(self, *levels: LevelRef) -> "LoggerBuilder":
        """Enable only the given levels on the logger."""
        self._enabled = list(levels)
        return self

    def with_formatter(self, formatter: Formatter) -> "LoggerBuilder":
        """Set the default formatter for transports without their own."""
        self._formatter = formatter
        return self

    def with_registry(self, registry: LoggerRegistry) -> "LoggerBuilder":
        """Register the logger in this registry instead of the default one."""
        self._registry = registry
        return self

    def with_console(
        self,
        std: str = "err",
        colored: bool = True,
        enabled: Any = ALL,
    ) -> "LoggerBuilder":
        """
        Add a console transport.

        With colored=False the transport uses the logger's default formatter.
        """
        formatter = CompactFormatter(colored=True) if colored else None
        self._transport_factories.append(
            lambda levels: ConsoleTransport(
                levels, std=std, enabled=enabled, formatter=formatter
            )
        )
        return self

    def with_file(
        self,
        filepath: Union[str, Path],
        reset: bool = False,
        enabled: Any = ALL,
    ) -> "LoggerBuilder":
        """Add a file transport."""
        self._transport_factories.append(
            lambda levels: FileTransport(levels, filepath, reset=reset, enabled=enabled)
        )
        return self

    def with_tcp(
        self,
        host: str,
        port: int,
        timeout: float = 5.0,
        enabled: Any = ALL,
    ) -> "LoggerBuilder":
        """Add a TCP transport."""
        self._transport_factories.append(
            lambda levels: TcpTransport(levels, host, port, timeout=timeout, enabled=enabled)
        )
        return self

    def with_webhook(
        self,
        url: str,
        username: Optional[str] = None,
        avatar_url: Optional[str] = None,
        enabled: Any = ALL,
    ) -> "LoggerBuilder":
        """Add a webhook transport."""
        self._transport_factories.append(
            lambda levels: WebhookTransport(
                levels, url, username=username, avatar_url=avatar_url, enabled=enabled
            )
        )
        return self

    def add_transport(self, transport: Any) -> "LoggerBuilder":
        """Add an already constructed transport."""
        self._transport_factories.append(lambda levels: transport)
        return self

    async def build(self) -> Logger:
        """
        Build the logger and attach the configured transports.

        Returns:
            Logger from the registry, with transports attached
        """
        registry = self._registry if self._registry is not None else get_registry()
        logger = registry.get(
            self._name, self._levels, self._formatter, enabled=self._enabled
        )
        transports = [factory(self._levels) for factory in self._transport_factories]
        await logger.use(*transports)
        return logger
