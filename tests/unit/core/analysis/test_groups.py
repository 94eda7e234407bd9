from __future__ import annotations

"""
Unit tests for the log group registry.
"""

import json

import pytest

from compactlog.core.analysis.groups import groups_from_mapping, load_groups
from compactlog.domain.errors import GroupRegistryError
from compactlog.domain.models import LogGroup


def test_groups_from_mapping_with_defaults() -> None:
    groups = groups_from_mapping({
        "WM_DEBUG": {"enabled": True},
        "WM_ERROR": {"enabled": False, "text_enabled": True, "tag": "WindowManager"},
    })

    assert groups == {
        "WM_DEBUG": LogGroup("WM_DEBUG", True, False, "WM_DEBUG"),
        "WM_ERROR": LogGroup("WM_ERROR", False, True, "WindowManager"),
    }


@pytest.mark.parametrize("data", [
    [],
    {"G": "enabled"},
    {"G": {}},
    {"G": {"enabled": "yes"}},
    {"G": {"enabled": True, "text_enabled": 1}},
    {"G": {"enabled": True, "tag": 5}},
    {" ": {"enabled": True}},
])
def test_groups_from_mapping_rejects_malformed(data) -> None:
    with pytest.raises(GroupRegistryError):
        groups_from_mapping(data)


def test_load_groups_from_file(tmp_path) -> None:
    path = tmp_path / "groups.json"
    path.write_text(json.dumps({"WM_SHELL": {"enabled": True, "tag": "Shell"}}), encoding="utf-8")

    assert load_groups(str(path)) == {"WM_SHELL": LogGroup("WM_SHELL", True, False, "Shell")}


def test_load_groups_missing_or_corrupt_file(tmp_path) -> None:
    with pytest.raises(GroupRegistryError):
        load_groups(str(tmp_path / "missing.json"))

    corrupt = tmp_path / "corrupt.json"
    corrupt.write_text("{", encoding="utf-8")
    with pytest.raises(GroupRegistryError):
        load_groups(str(corrupt))
