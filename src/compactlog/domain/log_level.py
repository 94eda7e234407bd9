from __future__ import annotations

"""
Log Severity Domain Model.

Defines the totally ordered set of severities a compacted log call can carry.
Declaration order is the ordering contract and must stay stable across builds,
since identifiers are derived from the level name.
"""

from enum import Enum
from functools import total_ordering
from typing import List


@total_ordering
class LogLevel(Enum):
    """Severity levels ordered from least to most severe."""

    DEBUG = "DEBUG"
    VERBOSE = "VERBOSE"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    WTF = "WTF"

    @property
    def rank(self) -> int:
        """Position of the level in the declared ordering."""
        return _ORDER.index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.rank < other.rank

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """
        Resolve a level from its exact serialized name.

        Args:
            name: Upper-case level name as written in a viewer config.

        Returns:
            LogLevel: The matching level.

        Raises:
            ValueError: If the name is not a known level.
        """
        try:
            return cls[name]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {name!r}") from exc

    @classmethod
    def names(cls) -> List[str]:
        return [level.name for level in cls]


_ORDER: List[LogLevel] = list(LogLevel)
