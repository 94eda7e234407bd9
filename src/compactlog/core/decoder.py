from __future__ import annotations

"""
Compacted Log Decoder.

Rebuilds human-readable log lines from an identifier, its arguments and a
parsed viewer config.
"""

import re
from typing import Any, Dict, Mapping, Sequence

from compactlog.domain.errors import MessageFormatError, UnknownIdentifierError
from compactlog.domain.models import ConfigEntry

_SPEC_RX = re.compile(r"%(.)", re.DOTALL)
_CONVERSIONS = "bdoxfegs"
_INT32_MIN = -(1 << 31)
_INT64_MIN = -(1 << 63)


def decode_message(entry: ConfigEntry, args: Sequence[Any]) -> str:
    """
    Substitute arguments into the template of a viewer config entry.

    Supported placeholders: %b %d %o %x %f %e %g %s and the %% escape.
    String arguments are coerced for numeric placeholders, so values taken
    straight from a command line work as well.
    Negative values under %o and %x print in two's complement, 32 bits wide
    when they fit an int and 64 bits wide otherwise.

    Args:
        entry: The viewer config entry holding the template.
        args: Positional arguments, in placeholder order.

    Returns:
        str: The formatted message.

    Raises:
        MessageFormatError: On a count mismatch, an unsupported placeholder
                            or an argument that cannot be converted.
    """
    template = entry.message
    trailing = len(template) - len(template.rstrip("%"))
    if trailing % 2:
        raise MessageFormatError(f"Dangling '%' at end of '{template}'.")

    expected = sum(1 for m in _SPEC_RX.finditer(template) if m.group(1) != "%")
    if expected != len(args):
        raise MessageFormatError(
            f"Template '{template}' expects {expected} argument(s), got {len(args)}."
        )

    remaining = iter(args)

    def _replace(match: "re.Match[str]") -> str:
        conv = match.group(1)
        if conv == "%":
            return "%"
        if conv not in _CONVERSIONS:
            raise MessageFormatError(f"Unsupported placeholder '%{conv}' in '{template}'.")
        return _format_value(conv, next(remaining))

    return _SPEC_RX.sub(_replace, template)


class ViewerConfigDecoder:
    """Decodes compacted log records against a parsed viewer config."""

    def __init__(self, table: Mapping[int, ConfigEntry]) -> None:
        self._table: Dict[int, ConfigEntry] = dict(table)

    def lookup(self, identifier: int) -> ConfigEntry:
        try:
            return self._table[identifier]
        except KeyError:
            raise UnknownIdentifierError(identifier) from None

    def decode(self, identifier: int, args: Sequence[Any] = ()) -> str:
        """
        Render a full log line for a compacted record.

        Args:
            identifier: Identifier logged at runtime.
            args: Arguments logged with it.

        Returns:
            str: Line formatted as "<LEVEL> <TAG>: <message>".
        """
        entry = self.lookup(identifier)
        return f"{entry.level.name} {entry.tag}: {decode_message(entry, args)}"


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _format_value(conv: str, value: Any) -> str:
    try:
        if conv == "s":
            return _as_text(value)
        if conv == "b":
            return "true" if _as_bool(value) else "false"
        if conv in "dox":
            number = _as_int(value)
            if conv == "d":
                return str(number)
            return format(_unsigned(number), conv)
        return format(_as_float(value), {"f": ".6f", "e": ".6e", "g": ".6g"}[conv])
    except (TypeError, ValueError) as e:
        raise MessageFormatError(f"Cannot format {value!r} with '%{conv}': {e}") from e


def _as_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        s = value.strip().lower()
        if s in ("true", "1"):
            return True
        if s in ("false", "0"):
            return False
        raise ValueError(f"not a boolean literal: {value!r}")
    return bool(value)


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError("booleans are not integers here")
    if isinstance(value, str):
        s = value.strip()
        try:
            return int(s, 0)
        except ValueError:
            return int(s, 10)
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"{value} is not integral")
    return int(value)


def _unsigned(number: int) -> int:
    if number >= 0:
        return number
    if number >= _INT32_MIN:
        return number & 0xFFFFFFFF
    if number >= _INT64_MIN:
        return number & 0xFFFFFFFFFFFFFFFF
    raise ValueError(f"{number} is outside the 64-bit range")


def _as_float(value: Any) -> float:
    if isinstance(value, bool):
        raise TypeError("booleans are not floats here")
    return float(value)
