"""Diagnostics logging for steam-cli.

Command results (human text or the JSON envelope) are the only thing
written to stdout, so scripts can pipe them. Every diagnostic goes
through the "steamcli" logger to stderr instead. By default only
warnings reach the console; ``-v`` lowers the level to DEBUG and adds
a log file under the data directory.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

__all__ = ["logger", "setup_logging"]

logger = logging.getLogger("steamcli")

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATE_FORMAT = "%H:%M:%S"


def _has_file_handler(path: Path) -> bool:
    target = os.path.abspath(path)
    return any(
        isinstance(handler, logging.FileHandler) and handler.baseFilename == target for handler in logger.handlers
    )


def setup_logging(
    level: int = logging.WARNING,
    log_file: Path | None = None,
) -> None:
    """Configures the steamcli logger for a CLI run.

    Safe to call more than once: the stderr handler is created once and
    later calls only change its level, and a given log file is attached
    at most once.

    Args:
        level: Console level (default: WARNING).
        log_file: Optional file that receives DEBUG output as well.
    """
    logger.setLevel(logging.DEBUG if log_file is not None else level)

    formatter = logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT)

    console = next(
        (h for h in logger.handlers if type(h) is logging.StreamHandler),
        None,
    )
    if console is None:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(formatter)
        logger.addHandler(console)
    console.setLevel(level)

    if log_file is not None and not _has_file_handler(log_file):
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
