from __future__ import annotations

"""
Compaction Error Taxonomy.

All failures raised by the package derive from CompactLogError so that
interface layers can trap them with a single handler.
"""

from typing import Optional

from compactlog.domain.models import CallSite


class CompactLogError(Exception):
    """Base class for all compactlog failures."""


class MalformedTableError(CompactLogError):
    """A serialized viewer config does not conform to the table format."""


class GroupRegistryError(CompactLogError):
    """A log group definition is missing fields or has the wrong types."""


class InvalidCallSiteError(CompactLogError):
    """
    A log call was found that cannot be compacted.

    Attributes:
        call_site: Location of the offending call, when known.
    """

    def __init__(self, message: str, call_site: Optional[CallSite] = None) -> None:
        self.call_site = call_site
        if call_site is not None:
            message = f"{call_site}: {message}"
        super().__init__(message)


class UnknownIdentifierError(CompactLogError):
    """An identifier has no entry in the viewer config."""

    def __init__(self, identifier: int) -> None:
        self.identifier = identifier
        super().__init__(f"Identifier {identifier} not found in viewer config.")


class MessageFormatError(CompactLogError):
    """Arguments do not fit the placeholders of a message template."""
