from __future__ import annotations

"""
Configuration Domain Management.

Handles the project-level configuration of a compaction run. Settings live in
a JSON project file that is merged over built-in defaults; the resulting
dictionary drives the generation pipeline.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from compactlog.core.services.filters import (
    default_exclude_patterns,
    default_extensions,
    default_include_patterns,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
DEFAULT_CONFIG_FILE = "compactlog.json"
DEFAULT_OUTPUT_FILE = "viewer_config.json"
DEFAULT_PROTOLOG_CLASS = "ProtoLog"
DEFAULT_GROUP_CLASS = "ProtoLogGroup"


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    base = os.getcwd()
    return {
        # IO Paths
        "source_root": base,
        "output_path": os.path.join(base, DEFAULT_OUTPUT_FILE),

        # Filtering
        "extensions": default_extensions(),
        "include_patterns": default_include_patterns(),
        "exclude_patterns": default_exclude_patterns(),

        # Call-site recognition
        "protolog_class": DEFAULT_PROTOLOG_CLASS,
        "group_class": DEFAULT_GROUP_CLASS,

        # Log groups (inline declarations, optionally extended by a file)
        "groups": {},
        "groups_file": "",
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load a project configuration file merged over the defaults.

    Missing or corrupted files fall back to the defaults; unknown keys are
    dropped.

    Args:
        path: Location of the JSON project file. Defaults to
              'compactlog.json' in the working directory.

    Returns:
        Dict[str, Any]: The merged configuration.
    """
    config = get_default_config()
    path = path or os.path.join(os.getcwd(), DEFAULT_CONFIG_FILE)

    if not os.path.exists(path):
        logger.debug(f"Config file {path} not found. Using defaults.")
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to load config {path}: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning(f"Corrupted config file {path}. Using defaults.")
        return config

    for key, value in data.items():
        if key in config:
            config[key] = value
        else:
            logger.debug(f"Ignoring unknown config key '{key}'")

    return config


def save_config(config: Dict[str, Any], path: str) -> None:
    """
    Persist a configuration dictionary to disk.

    Args:
        config: The configuration to save.
        path: Target JSON file.
    """
    try:
        parent = os.path.dirname(os.path.abspath(path))
        os.makedirs(parent, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(config, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {path}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
