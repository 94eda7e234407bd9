from __future__ import annotations

"""
Unit tests for the domain models and severity ordering.
"""

import dataclasses

import pytest

from compactlog.domain.errors import InvalidCallSiteError
from compactlog.domain.log_level import LogLevel
from compactlog.domain.models import CallSite, ConfigEntry, LogGroup


def test_levels_are_totally_ordered() -> None:
    ordered = [LogLevel.DEBUG, LogLevel.VERBOSE, LogLevel.INFO, LogLevel.WARN, LogLevel.ERROR, LogLevel.WTF]

    assert sorted(reversed(ordered)) == ordered
    assert LogLevel.DEBUG < LogLevel.ERROR
    assert LogLevel.WTF >= LogLevel.WARN
    assert not LogLevel.INFO > LogLevel.INFO


def test_level_from_name() -> None:
    assert LogLevel.from_name("WARN") is LogLevel.WARN
    with pytest.raises(ValueError):
        LogLevel.from_name("warn")


def test_config_entry_equality_covers_all_fields() -> None:
    entry = ConfigEntry("test1", LogLevel.INFO, "WM_TEST")

    assert entry == ConfigEntry("test1", LogLevel.INFO, "WM_TEST")
    assert entry != ConfigEntry("test1", LogLevel.INFO, "WM_DEBUG")


def test_value_objects_are_immutable() -> None:
    group = LogGroup("G", True, False, "T")

    with pytest.raises(dataclasses.FrozenInstanceError):
        group.enabled = False  # type: ignore[misc]


def test_invalid_call_site_error_carries_location() -> None:
    err = InvalidCallSiteError("bad call", CallSite("a.py", 3, 8))

    assert str(err) == "a.py:3:8: bad call"
    assert err.call_site.lineno == 3
