"""Logging setup for the interactive session.

The terminal is in raw alternate-screen mode while marcos runs, so records go
to a file or nowhere; they are never written to stdout or stderr.
"""

from __future__ import annotations

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}
DEFAULT_LOG_LEVEL = "info"


def parse_log_level(name: str | None) -> int:
    """Map a case-insensitive level name to a ``logging`` level."""
    if name is None:
        return LOG_LEVELS[DEFAULT_LOG_LEVEL]
    try:
        return LOG_LEVELS[name.strip().lower()]
    except KeyError:
        raise ValueError(
            f"invalid log level {name!r} (choose from {', '.join(LOG_LEVELS)})"
        ) from None


def init_logging(log_file: Path | str | None = None, log_level: str | None = None) -> logging.Logger:
    """Configure the ``marcos`` logger hierarchy and return its root.

    Re-initializing replaces previously installed handlers.
    """
    level = parse_log_level(log_level)
    root = logging.getLogger("marcos")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    handler: logging.Handler
    if log_file is None:
        handler = logging.NullHandler()
    else:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    handler.setLevel(level)
    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False
    return root
