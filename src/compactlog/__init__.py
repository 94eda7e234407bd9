from __future__ import annotations

"""
compactlog: build-time log call compaction.

Facade over the viewer config builder, parser and decoder.
"""

from compactlog.core.builder import ViewerConfigBuilder
from compactlog.core.decoder import ViewerConfigDecoder, decode_message
from compactlog.core.hashing import hash_message
from compactlog.core.parser import ViewerConfigParser, parse_config
from compactlog.core.visitor import CallProcessor, CallVisitor
from compactlog.domain.errors import CompactLogError, MalformedTableError
from compactlog.domain.log_level import LogLevel
from compactlog.domain.models import CallSite, ConfigEntry, LogGroup, SourceUnit

__version__ = "0.1.0"

__all__ = [
    "ViewerConfigBuilder",
    "ViewerConfigParser",
    "ViewerConfigDecoder",
    "parse_config",
    "decode_message",
    "hash_message",
    "CallProcessor",
    "CallVisitor",
    "CompactLogError",
    "MalformedTableError",
    "LogLevel",
    "LogGroup",
    "ConfigEntry",
    "CallSite",
    "SourceUnit",
]
