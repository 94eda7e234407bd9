from __future__ import annotations

"""
Source File Filtering Rules.

Implements regex-based inclusion/exclusion logic used while discovering the
compilation units that may contain compacted log calls.
"""

import logging
import re
from typing import List

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# CONFIGURATION DEFAULTS
# -----------------------------------------------------------------------------

def default_extensions() -> List[str]:
    """
    Get the default list of scanned file extensions.

    Returns:
        List[str]: Python source extensions.
    """
    return [".py"]


def default_include_patterns() -> List[str]:
    """Get the default inclusion regex list (match everything)."""
    return [".*"]


def default_exclude_patterns() -> List[str]:
    """
    Get the system-level exclusion patterns.

    Skips compiled artifacts, virtual environments and tool directories that
    never hold first-party log calls.

    Returns:
        List[str]: List of regex patterns for common exclusions.
    """
    return [
        r".*\.pyc$",
        r"^(__pycache__|\.git|\.tox|\.venv|venv|build|dist|node_modules)$",
        r"^\.",
    ]

# -----------------------------------------------------------------------------
# PATTERN COMPILATION AND MATCHING
# -----------------------------------------------------------------------------

def compile_patterns(patterns: List[str]) -> List[re.Pattern]:
    """
    Transform raw regex strings into compiled Pattern objects.

    Malformed expressions are discarded with a warning instead of aborting
    the scan.

    Args:
        patterns: List of raw regex strings.

    Returns:
        List[re.Pattern]: Compiled regex objects.
    """
    compiled: List[re.Pattern] = []
    for p in patterns:
        try:
            compiled.append(re.compile(p))
        except re.error as e:
            logger.warning(f"Ignoring invalid pattern '{p}': {e}")
    return compiled


def matches_any(name: str, compiled_patterns: List[re.Pattern]) -> bool:
    """Verify if a name matches at least one compiled pattern."""
    return any(rx.search(name) for rx in compiled_patterns)


def matches_include(name: str, include_patterns: List[re.Pattern]) -> bool:
    """
    Verify if a name satisfies the inclusion whitelist.

    An empty whitelist accepts everything.
    """
    if not include_patterns:
        return True
    return matches_any(name, include_patterns)
