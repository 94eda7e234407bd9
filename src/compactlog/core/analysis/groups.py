from __future__ import annotations

"""
Log Group Registry.

Loads the named log group descriptors that call sites refer to. Groups are
declared as a JSON object keyed by group name:

    {"WM_DEBUG": {"enabled": true, "text_enabled": false, "tag": "WindowManager"}}
"""

import json
import logging
from typing import Any, Dict, Mapping

from compactlog.domain.errors import GroupRegistryError
from compactlog.domain.models import LogGroup

logger = logging.getLogger(__name__)


def groups_from_mapping(data: Any) -> Dict[str, LogGroup]:
    """
    Build group descriptors from their JSON-like declaration.

    ``text_enabled`` defaults to False and ``tag`` defaults to the group name.

    Args:
        data: Mapping of group name to its flags.

    Returns:
        Dict[str, LogGroup]: Descriptors keyed by group name.

    Raises:
        GroupRegistryError: If a declaration is malformed.
    """
    if not isinstance(data, Mapping):
        raise GroupRegistryError(
            f"Log groups must be declared as an object, found {type(data).__name__}."
        )

    groups: Dict[str, LogGroup] = {}
    for name, spec in data.items():
        if not isinstance(name, str) or not name.strip():
            raise GroupRegistryError(f"Invalid log group name {name!r}.")
        if not isinstance(spec, Mapping):
            raise GroupRegistryError(f"Log group '{name}' must be an object.")

        enabled = spec.get("enabled")
        if not isinstance(enabled, bool):
            raise GroupRegistryError(f"Log group '{name}' requires a boolean 'enabled'.")

        text_enabled = spec.get("text_enabled", False)
        if not isinstance(text_enabled, bool):
            raise GroupRegistryError(f"Log group '{name}': 'text_enabled' must be a boolean.")

        tag = spec.get("tag", name)
        if not isinstance(tag, str):
            raise GroupRegistryError(f"Log group '{name}': 'tag' must be a string.")

        groups[name] = LogGroup(name=name, enabled=enabled, text_enabled=text_enabled, tag=tag)

    return groups


def load_groups(path: str) -> Dict[str, LogGroup]:
    """
    Read group declarations from a JSON file.

    Raises:
        GroupRegistryError: If the file cannot be read or is malformed.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise GroupRegistryError(f"Cannot load log groups from '{path}': {e}") from e

    groups = groups_from_mapping(data)
    logger.debug(f"Loaded {len(groups)} log groups from {path}")
    return groups
