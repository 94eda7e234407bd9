from __future__ import annotations

"""
Source Discovery Service.

Traverses a project tree and yields the source files eligible for log call
extraction, pruning excluded directories early.
"""

import logging
import os
import re
from typing import Dict, Iterable, List, Optional, Tuple

from compactlog.core.services.filters import (
    compile_patterns,
    default_exclude_patterns,
    default_include_patterns,
    matches_any,
    matches_include,
)

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def yield_source_files(
        source_root: str,
        extensions: List[str],
        include_rx: List[re.Pattern],
        exclude_rx: List[re.Pattern],
) -> Iterable[Dict[str, str]]:
    """
    Walk the source tree and yield files that satisfy the filtering criteria.

    Directories and files are visited in sorted order so that repeated scans
    of the same tree discover units in the same sequence.

    Args:
        source_root: Path to the project root.
        extensions: Whitelist of scanned file extensions.
        include_rx: Compiled regex patterns for inclusion.
        exclude_rx: Compiled regex patterns for exclusion.

    Yields:
        Dict[str, str]: Metadata for each file found:
                        - file_path: Absolute path.
                        - rel_path: Relative path from root.
    """
    root_abs = os.path.abspath(source_root)

    for root, dirs, files in os.walk(root_abs):
        dirs[:] = [d for d in dirs if not matches_any(d, exclude_rx)]
        dirs.sort()
        files.sort()

        for file_name in files:
            if matches_any(file_name, exclude_rx):
                continue
            if not matches_include(file_name, include_rx):
                continue

            _, ext = os.path.splitext(file_name)
            if ext not in extensions and file_name not in extensions:
                continue

            file_path = os.path.join(root, file_name)
            yield {
                "file_path": file_path,
                "rel_path": os.path.relpath(file_path, root_abs),
            }


def prepare_filtering_rules(
        include_patterns: Optional[List[str]],
        exclude_patterns: Optional[List[str]],
) -> Tuple[List[re.Pattern], List[re.Pattern]]:
    """
    Compile inclusion and exclusion patterns, falling back to the defaults.

    Returns:
        Tuple[List[re.Pattern], List[re.Pattern]]: (Include Patterns, Exclude Patterns).
    """
    final_includes = include_patterns if include_patterns is not None else default_include_patterns()
    final_exclusions = exclude_patterns if exclude_patterns is not None else default_exclude_patterns()
    return compile_patterns(final_includes), compile_patterns(final_exclusions)


def read_source(file_path: str) -> str:
    """
    Read a source file as UTF-8 text.

    Raises:
        OSError: If the file cannot be opened.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    with open(file_path, "r", encoding="utf-8") as f:
        return f.read()
