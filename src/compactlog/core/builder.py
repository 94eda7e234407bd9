from __future__ import annotations

"""
Viewer Config Builder.

Accumulates the identifier -> entry table from discovered log calls and
renders it to the JSON viewer config. Call sites of disabled groups are
dropped; duplicates collapse onto one row keyed by their identifier.
"""

import json
import logging
import threading
from typing import Dict

from compactlog.core.hashing import hash_message
from compactlog.core.visitor import CallProcessor, CallVisitor
from compactlog.domain.log_level import LogLevel
from compactlog.domain.models import CallSite, ConfigEntry, LogGroup, SourceUnit

logger = logging.getLogger(__name__)


class ViewerConfigBuilder(CallVisitor):
    """
    Collects compacted log calls reported by a call processor.

    The table only grows between ``build()`` calls. Inserts are guarded by a
    lock: units may be processed from several threads, and writes to the same
    identifier must be serialized for "last write wins" to hold.
    """

    def __init__(self, processor: CallProcessor) -> None:
        self._processor = processor
        self._entries: Dict[int, ConfigEntry] = {}
        self._lock = threading.Lock()

        self.processed_calls = 0
        self.skipped_calls = 0
        self.collisions = 0

    # -------------------------------------------------------------------------
    # PUBLIC API
    # -------------------------------------------------------------------------

    def process_unit(self, unit: SourceUnit) -> None:
        """
        Feed one compilation unit through the processor into this builder.

        Args:
            unit: The compilation unit to scan.
        """
        self._processor.process(unit, self)

    def on_call_discovered(
            self,
            call_site: CallSite,
            message: str,
            level: LogLevel,
            group: LogGroup,
    ) -> None:
        if not group.enabled:
            with self._lock:
                self.skipped_calls += 1
            return

        identifier = hash_message(message, level)
        entry = ConfigEntry(message=message, level=level, tag=group.tag)

        with self._lock:
            previous = self._entries.get(identifier)
            if previous is not None and (previous.message, previous.level) != (message, level):
                self.collisions += 1
                logger.warning(
                    f"Identifier collision {identifier} at {call_site}: "
                    f"'{previous.message}' ({previous.level.name}) replaced by "
                    f"'{message}' ({level.name})"
                )
            self._entries[identifier] = entry
            self.processed_calls += 1

    def build(self) -> str:
        """
        Render the current table as a JSON viewer config.

        Accumulated state is left untouched, so repeated calls return the
        latest snapshot.

        Returns:
            str: JSON document keyed by decimal identifiers.
        """
        with self._lock:
            snapshot = sorted(self._entries.items())

        table = {
            str(identifier): {
                "message": entry.message,
                "level": entry.level.name,
                "tag": entry.tag,
            }
            for identifier, entry in snapshot
        }
        logger.debug(f"Rendering viewer config with {len(table)} entries")
        return json.dumps(table, ensure_ascii=False, indent=2)

    @property
    def entries(self) -> Dict[int, ConfigEntry]:
        """Copy of the accumulated identifier -> entry mapping."""
        with self._lock:
            return dict(self._entries)
