from __future__ import annotations

"""
Pipeline Domain Data Models.

Defines the result objects used to communicate generation outcomes between
the pipeline engine and the CLI.
"""

from dataclasses import dataclass, field
from typing import List

# -----------------------------------------------------------------------------
# ERROR TRACKING MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SourceError:
    """
    A compilation unit that could not be processed.

    Attributes:
        rel_path: File path relative to the source root.
        error: Descriptive error message.
    """
    rel_path: str
    error: str


# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class GenerationResult:
    """
    Outcome of a viewer config generation run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        output_path: Absolute path of the viewer config (planned or written).
        files_scanned: Number of compilation units processed.
        call_sites: Number of compacted calls from enabled groups.
        skipped_calls: Number of calls dropped because their group is disabled.
        entries: Number of distinct rows in the table.
        collisions: Number of identifier collisions observed.
        errors: Per-file failures collected during the scan.
        dry_run: Whether writing the table was skipped on purpose.
    """
    ok: bool
    error: str = ""
    output_path: str = ""

    files_scanned: int = 0
    call_sites: int = 0
    skipped_calls: int = 0
    entries: int = 0
    collisions: int = 0

    errors: List[SourceError] = field(default_factory=list)
    dry_run: bool = False
