"""
Level set definitions

A level set is a fixed, ordered collection of level names. The position of
a name is its index, and the index is the bit position used by LevelGate.
"""

from typing import Dict, Iterable, Mapping, Optional, Tuple, Union

from relaylog.core.exceptions import UnknownLevelError

# Enabled levels are kept in a 32-bit mask, highest bit reserved.
MAX_LEVELS = 31

LevelRef = Union[str, int]


class LevelSet:
    """
    Ordered, immutable collection of named levels.

    Two level sets are compatible only if they are the same object; equal
    names are not enough. Loggers registered under one name must keep
    using the same instance.

    Example:
        levels = LevelSet(["fatal", "error", "info"], aliases={"err": "error"})
        levels.index("err")   # 1
        levels.name(2)        # "info"
    """

    def __init__(
        self,
        names: Iterable[str],
        aliases: Optional[Mapping[str, str]] = None,
        name: str = "",
    ):
        """
        Initialize level set.

        Args:
            names: Level names, in index order
            aliases: Extra names mapped to a canonical level name
            name: Optional label used in repr()

        Raises:
            ValueError: If the set is empty, too large, or has duplicates
        """
        self._names: Tuple[str, ...] = tuple(names)
        self.label = name

        if not self._names:
            raise ValueError("Level set must contain at least one level")
        if len(self._names) > MAX_LEVELS:
            raise ValueError(
                f"Level set has {len(self._names)} levels, maximum is {MAX_LEVELS}"
            )
        if len(set(self._names)) != len(self._names):
            raise ValueError("Level names must be unique")

        self._lookup: Dict[str, int] = {n: i for i, n in enumerate(self._names)}
        self._aliases: Dict[str, str] = dict(aliases or {})
        for alias, target in self._aliases.items():
            if target not in self._lookup:
                raise ValueError(f"Alias '{alias}' targets unknown level '{target}'")
            if alias in self._lookup:
                raise ValueError(f"Alias '{alias}' shadows an existing level")
            self._lookup[alias] = self._lookup[target]

    @property
    def names(self) -> Tuple[str, ...]:
        """Canonical level names in index order."""
        return self._names

    @property
    def aliases(self) -> Dict[str, str]:
        """Alias to canonical name mapping."""
        return dict(self._aliases)

    def index(self, level: LevelRef) -> int:
        """
        Resolve a level reference to its index.

        Args:
            level: Level name, alias, index, or decimal string index

        Returns:
            Level index

        Raises:
            UnknownLevelError: If the reference does not resolve
        """
        if isinstance(level, bool):
            raise UnknownLevelError(level)
        if isinstance(level, int):
            if 0 <= level < len(self._names):
                return level
            raise UnknownLevelError(level)
        if isinstance(level, str):
            if level in self._lookup:
                return self._lookup[level]
            if level.isdigit():
                return self.index(int(level))
        raise UnknownLevelError(level)

    def name(self, level: LevelRef) -> str:
        """Return the canonical name for a level reference."""
        return self._names[self.index(level)]

    def __contains__(self, level) -> bool:
        try:
            self.index(level)
        except UnknownLevelError:
            return False
        return True

    def __iter__(self):
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        label = f"{self.label}: " if self.label else ""
        return f"LevelSet({label}{', '.join(self._names)})"


DEFAULT_LEVELS = LevelSet(
    ["critical", "error", "warn", "notice", "info", "debug", "trace"],
    aliases={"warning": "warn", "informational": "info"},
    name="default",
)

SYSLOG_LEVELS = LevelSet(
    [
        "emergency",
        "alert",
        "critical",
        "error",
        "warning",
        "notice",
        "informational",
        "debug",
    ],
    name="syslog",
)
