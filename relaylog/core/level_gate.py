"""
Level gate - enabled-level bitmask

Bit ``1 << i`` of the mask is set when level ``i`` of the bound level set
is enabled.
"""

from typing import Iterable, List, Union

from relaylog.core.level_set import LevelRef, LevelSet


class _AllLevels:
    """Sentinel meaning every level in the set is enabled."""

    def __repr__(self) -> str:
        return "ALL"


ALL = _AllLevels()

EnabledLevels = Union[_AllLevels, Iterable[LevelRef]]


class LevelGate:
    """
    Enable, disable and query levels of a level set.

    Loggers and transports derive from this class, so the same methods
    answer "is this level emitted by me" for both.

    Example:
        gate = LevelGate(DEFAULT_LEVELS, enabled=["error", "critical"])
        gate.emits("error")              # True
        gate.enable("warn").emits("warn", "error")  # True
    """

    def __init__(self, levels: LevelSet, enabled: EnabledLevels = ALL):
        """
        Initialize level gate.

        Args:
            levels: Level set the gate is bound to
            enabled: ALL, or the levels to enable initially

        Raises:
            TypeError: If levels is not a LevelSet
            UnknownLevelError: If an enabled level is not in the set
        """
        if not isinstance(levels, LevelSet):
            raise TypeError("levels must be a LevelSet")
        self._level_set = levels
        self._mask = 0

        if enabled is ALL:
            self._mask = (1 << len(levels)) - 1
        else:
            self.enable(*enabled)

    @property
    def level_set(self) -> LevelSet:
        """Level set this gate is bound to."""
        return self._level_set

    @property
    def levels(self) -> int:
        """Current enabled-level bitmask."""
        return self._mask

    def enable(self, *levels: LevelRef) -> "LevelGate":
        """
        Enable one or more levels.

        All references are resolved before the mask changes, so an unknown
        level leaves the gate untouched.
        """
        bits = self._bits(levels)
        self._mask |= bits
        return self

    def disable(self, *levels: LevelRef) -> "LevelGate":
        """Disable one or more levels."""
        bits = self._bits(levels)
        self._mask &= ~bits
        return self

    def emits(self, *levels: LevelRef) -> bool:
        """
        Check whether every given level is enabled.

        Raises:
            UnknownLevelError: If any level is not in the set
        """
        bits = self._bits(levels)
        return (self._mask & bits) == bits

    def enabled_names(self) -> List[str]:
        """Names of the enabled levels in index order."""
        return [
            name
            for i, name in enumerate(self._level_set.names)
            if self._mask & (1 << i)
        ]

    def _bits(self, levels) -> int:
        bits = 0
        for level in levels:
            bits |= 1 << self._level_set.index(level)
        return bits
