from __future__ import annotations

"""
Viewer Config Parser.

Decodes a serialized viewer config back into its identifier -> entry form.
Any deviation from the table format is a hard failure: a corrupt decoder
table silently producing wrong log text is worse than no table at all.
"""

import json
import re
from typing import Any, Dict, List, Tuple, Union

from compactlog.domain.errors import MalformedTableError
from compactlog.domain.log_level import LogLevel
from compactlog.domain.models import ConfigEntry

_KEY_RX = re.compile(r"0|-?[1-9][0-9]*")
_INT32_MIN = -(1 << 31)
_INT32_MAX = (1 << 31) - 1
_REQUIRED_FIELDS = ("message", "level", "tag")


class ViewerConfigParser:
    """Stateless decoder for viewer config documents."""

    def parse(self, data: Union[str, bytes]) -> Dict[int, ConfigEntry]:
        """
        Parse a viewer config document.

        Unknown fields inside an entry are ignored for forward compatibility.
        Keys must be canonical decimal integers and appear only once, so no
        two rows can claim the same identifier.

        Args:
            data: JSON text, or its UTF-8 encoding.

        Returns:
            Dict[int, ConfigEntry]: Entries keyed by identifier.

        Raises:
            MalformedTableError: If the document does not match the table format.
        """
        if isinstance(data, (bytes, bytearray)):
            try:
                data = bytes(data).decode("utf-8")
            except UnicodeDecodeError as e:
                raise MalformedTableError(f"Viewer config is not valid UTF-8: {e}") from e

        try:
            raw = json.loads(data, object_pairs_hook=_unique_object)
        except (json.JSONDecodeError, TypeError, RecursionError) as e:
            raise MalformedTableError(f"Viewer config is not valid JSON: {e}") from e

        if not isinstance(raw, dict):
            raise MalformedTableError(
                f"Viewer config must be a JSON object, found {type(raw).__name__}."
            )

        return {
            self._parse_key(key): self._parse_entry(key, value)
            for key, value in raw.items()
        }

    # -------------------------------------------------------------------------
    # PRIVATE HELPERS
    # -------------------------------------------------------------------------

    @staticmethod
    def _parse_key(key: str) -> int:
        if not _KEY_RX.fullmatch(key):
            raise MalformedTableError(f"Invalid identifier key '{key}'.")
        identifier = int(key)
        if not _INT32_MIN <= identifier <= _INT32_MAX:
            raise MalformedTableError(f"Identifier {key} is outside the 32-bit range.")
        return identifier

    @staticmethod
    def _parse_entry(key: str, value: Any) -> ConfigEntry:
        if not isinstance(value, dict):
            raise MalformedTableError(
                f"Entry {key} must be an object, found {type(value).__name__}."
            )

        for field in _REQUIRED_FIELDS:
            if field not in value:
                raise MalformedTableError(f"Entry {key} is missing '{field}'.")
            if not isinstance(value[field], str):
                raise MalformedTableError(
                    f"Entry {key} field '{field}' must be a string, "
                    f"found {type(value[field]).__name__}."
                )

        try:
            level = LogLevel.from_name(value["level"])
        except ValueError as e:
            raise MalformedTableError(f"Entry {key}: {e}") from e

        return ConfigEntry(message=value["message"], level=level, tag=value["tag"])


def _unique_object(pairs: List[Tuple[str, Any]]) -> Dict[str, Any]:
    obj: Dict[str, Any] = {}
    for key, value in pairs:
        if key in obj:
            raise MalformedTableError(f"Duplicate key '{key}' in viewer config.")
        obj[key] = value
    return obj


def parse_config(data: Union[str, bytes]) -> Dict[int, ConfigEntry]:
    """Shortcut for ``ViewerConfigParser().parse(data)``."""
    return ViewerConfigParser().parse(data)
