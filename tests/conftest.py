from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared log groups and a scripted call processor standing in for a real
   source walker.
"""

import os
import sys
from typing import Callable, List, Tuple

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from compactlog.core.visitor import CallProcessor, CallVisitor  # noqa: E402
from compactlog.domain.log_level import LogLevel  # noqa: E402
from compactlog.domain.models import CallSite, LogGroup, SourceUnit  # noqa: E402

ScriptedCall = Tuple[str, LogLevel, LogGroup]


class ScriptedProcessor(CallProcessor):
    """Reports a fixed list of calls for every unit it is given."""

    def __init__(self, calls: List[ScriptedCall]) -> None:
        self.calls = calls
        self.units: List[SourceUnit] = []

    def process(self, unit: SourceUnit, visitor: CallVisitor) -> None:
        self.units.append(unit)
        for lineno, (message, level, group) in enumerate(self.calls, start=1):
            visitor.on_call_discovered(CallSite(unit.path, lineno), message, level, group)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def dummy_unit() -> SourceUnit:
    return SourceUnit(path="Dummy.py", source="")


@pytest.fixture
def test_group() -> LogGroup:
    return LogGroup("TEST_GROUP", enabled=True, text_enabled=True, tag="WM_TEST")


@pytest.fixture
def debug_group() -> LogGroup:
    return LogGroup("DEBUG_GROUP", enabled=True, text_enabled=True, tag="WM_DEBUG")


@pytest.fixture
def scripted_processor() -> Callable[[List[ScriptedCall]], ScriptedProcessor]:
    """Factory for processors replaying a list of (message, level, group)."""
    return ScriptedProcessor
