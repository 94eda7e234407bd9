from __future__ import annotations

"""
Logging settings consumed by ``configure_logging``.
"""

import logging
from dataclasses import dataclass
from typing import Optional

CONSOLE_FORMAT = "%(levelname)s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class LoggingConfig:
    """
    Attributes:
        level: Numeric threshold from the ``logging`` module.
        console: Mirror records to stderr.
        log_file: Rotating log file, or None for console only.
        max_bytes: Rollover size of the log file.
        backup_count: Rolled-over files kept next to it.
    """
    level: int = logging.INFO
    console: bool = True
    log_file: Optional[str] = None
    max_bytes: int = 1024 * 1024
    backup_count: int = 2
