from __future__ import annotations

"""
Logging Core Orchestrator.

Records from every compactlog logger go through one QueueHandler on the root
logger. A QueueListener thread owns the real stderr and file handlers, so a
slow log file never holds up a scan of a large source tree.
"""

import atexit
import logging
import queue
import sys
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from compactlog.infra.logging.config import (
    CONSOLE_FORMAT,
    DATE_FORMAT,
    FILE_FORMAT,
    LoggingConfig,
)
from compactlog.infra.logging.handlers import (
    _create_rotating_file_handler,
    _is_our_handler,
    _tag_handler,
)

_CONFIGURED_FLAG_ATTR: str = "_compactlog_configured"
_QUEUE_LISTENER_ATTR: str = "_compactlog_queue_listener"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Install compactlog's handlers on the root logger.

    Only the first call has an effect. With ``force`` the handlers and
    listener from an earlier call are replaced, which is how the CLI and the
    tests switch levels.

    Args:
        cfg: Level and destinations.
        force: Replace an existing setup.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()
    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    _teardown(root)
    root.setLevel(cfg.level)

    try:
        sinks = _build_sinks(cfg)
    except (OSError, ValueError, TypeError) as e:
        fallback = logging.StreamHandler(sys.stderr)
        fallback.setFormatter(logging.Formatter("CRITICAL FALLBACK | %(levelname)s | %(message)s"))
        _tag_handler(fallback)
        root.addHandler(fallback)
        root.warning(f"Logging setup failed ({e}). Switched to emergency console.")
        return root

    if sinks:
        log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)
        front = QueueHandler(log_queue)
        _tag_handler(front)
        listener = QueueListener(log_queue, *sinks, respect_handler_level=True)
        listener.start()
        atexit.register(_stop_listener, listener)

        root.addHandler(front)
        setattr(root, _QUEUE_LISTENER_ATTR, listener)
        setattr(root, _CONFIGURED_FLAG_ATTR, True)
    return root


def get_logger(name: str) -> logging.Logger:
    """Acquire a named logger (usually ``__name__``)."""
    return logging.getLogger(name)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _build_sinks(cfg: LoggingConfig) -> List[logging.Handler]:
    sinks: List[logging.Handler] = []
    if cfg.console:
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(cfg.level)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        _tag_handler(console)
        sinks.append(console)
    if cfg.log_file:
        rotating = _create_rotating_file_handler(
            cfg.log_file,
            cfg.level,
            logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT),
            cfg.max_bytes,
            cfg.backup_count,
        )
        if rotating:
            sinks.append(rotating)
    return sinks


def _teardown(root: logging.Logger) -> None:
    for h in list(root.handlers):
        if _is_our_handler(h):
            root.removeHandler(h)
            h.close()
    _stop_listener(getattr(root, _QUEUE_LISTENER_ATTR, None))
    setattr(root, _QUEUE_LISTENER_ATTR, None)


def _stop_listener(listener: Optional[QueueListener]) -> None:
    # atexit and a forced reconfigure can both reach the same listener
    if listener is not None and getattr(listener, "_thread", None) is not None:
        listener.stop()
