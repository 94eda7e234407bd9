from __future__ import annotations

"""
Compaction Domain Data Models.

Defines the value objects exchanged between call-site sources, the viewer
config builder and the viewer config parser.
"""

from dataclasses import dataclass

from compactlog.domain.log_level import LogLevel

# -----------------------------------------------------------------------------
# LOG GROUPS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class LogGroup:
    """
    Named logging category controlling participation in compaction.

    Attributes:
        name: Category identifier (not required to be unique).
        enabled: Whether call sites of this group are compacted at all.
        text_enabled: Whether the group also mirrors to a plain-text sink.
                      Never consulted when building the viewer config.
        tag: Label copied verbatim into every entry produced for the group.
    """
    name: str
    enabled: bool
    text_enabled: bool
    tag: str


# -----------------------------------------------------------------------------
# VIEWER CONFIG ENTRIES
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ConfigEntry:
    """
    One row of the viewer config table.

    Attributes:
        message: Original format string as written at the call site.
        level: Severity of the call.
        tag: Tag of the owning group at the time the call was processed.
    """
    message: str
    level: LogLevel
    tag: str


# -----------------------------------------------------------------------------
# CALL-SITE SOURCE MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class CallSite:
    """Location of a discovered log call, used for diagnostics only."""
    file_path: str
    lineno: int = 0
    col_offset: int = 0

    def __str__(self) -> str:
        return f"{self.file_path}:{self.lineno}:{self.col_offset}"


@dataclass(frozen=True)
class SourceUnit:
    """A single compilation unit handed to a call processor."""
    path: str
    source: str
