"""
Logger configuration management
"""

from dataclasses import dataclass
from typing import Optional

from relaylog.core.level_gate import ALL, EnabledLevels
from relaylog.core.level_set import DEFAULT_LEVELS, LevelSet
from relaylog.formatters.base_formatter import Formatter


@dataclass
class LoggerConfig:
    """
    Logger configuration.

    ``levels`` fixes the level names for the logger's lifetime; ``enabled``
    is only the initial selection and can be changed later with
    enable()/disable().
    """

    name: str = "logger"
    levels: LevelSet = DEFAULT_LEVELS
    enabled: EnabledLevels = ALL
    formatter: Optional[Formatter] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not self.name:
            raise ValueError("name must not be empty")
        if not isinstance(self.levels, LevelSet):
            raise TypeError("levels must be a LevelSet")
        if self.formatter is not None and not callable(self.formatter):
            raise TypeError("formatter must be callable")
        if self.enabled is not ALL:
            self.enabled = list(self.enabled)
            for level in self.enabled:
                # Raises UnknownLevelError
                self.levels.index(level)

    @classmethod
    def default(cls) -> "LoggerConfig":
        """Create default configuration."""
        return cls()

    @classmethod
    def debug_config(cls) -> "LoggerConfig":
        """Create configuration for debugging."""
        return cls(levels=DEFAULT_LEVELS, enabled=ALL)

    @classmethod
    def production_config(cls) -> "LoggerConfig":
        """Create configuration for production."""
        return cls(
            levels=DEFAULT_LEVELS,
            enabled=["critical", "error", "warn", "notice"],
        )

    @classmethod
    def quiet_config(cls) -> "LoggerConfig":
        """Create configuration that only emits failures."""
        return cls(levels=DEFAULT_LEVELS, enabled=["critical", "error"])
