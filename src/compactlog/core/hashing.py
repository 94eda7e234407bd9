from __future__ import annotations

"""
Message Identifier Hashing.

Derives the stable integer identifier of a (message template, level) pair.
The value is the Java String.hashCode of "<message> - <LEVEL>", so tables
stay compatible with identifiers already logged by shipped binaries.
Python's builtin hash() is salted per process and must never be used here.
"""

from compactlog.domain.log_level import LogLevel

_INT32_MASK = 0xFFFFFFFF
_INT32_SIGN = 0x80000000


def java_string_hash(text: str) -> int:
    """
    Compute the Java String.hashCode of a string.

    Iterates over UTF-16 code units (characters outside the BMP contribute
    their surrogate pair) with signed 32-bit wraparound.

    Args:
        text: Input string.

    Returns:
        int: Signed 32-bit hash value.
    """
    h = 0
    data = text.encode("utf-16-be", "surrogatepass")
    for i in range(0, len(data), 2):
        unit = (data[i] << 8) | data[i + 1]
        h = (31 * h + unit) & _INT32_MASK
    return h - (1 << 32) if h & _INT32_SIGN else h


def hash_message(message: str, level: LogLevel) -> int:
    """
    Compute the identifier of a log call.

    Args:
        message: Message template as written at the call site.
        level: Severity of the call.

    Returns:
        int: Signed 32-bit identifier.
    """
    return java_string_hash(f"{message} - {level.name}")
