"""Debug file logging for vpassport.

Every command appends to ``debug.log`` in the platform config dir, so the
file rotates at ``MAX_LOG_BYTES``. Rich owns the console; nothing here
writes to the terminal.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

import platformdirs

LOG_LEVEL_ENV = "VPASSPORT_LOG_LEVEL"
LOG_FILE_NAME = "debug.log"
MAX_LOG_BYTES = 1_000_000
BACKUP_COUNT = 3

LOG_FORMAT = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"


def _level_from_env() -> int:
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    level = logging.getLevelName(name) if name else logging.DEBUG
    return level if isinstance(level, int) else logging.DEBUG


def setup_logging(log_dir: Optional[Path] = None) -> Optional[Path]:
    """Attach the rotating debug file handler to the ``vpassport`` logger.

    Args:
        log_dir: Directory for the log file (default: platform config dir)

    Returns:
        Path of the log file, or None when the directory is not writable
        or logging was already set up.
    """
    logger = logging.getLogger("vpassport")
    logger.setLevel(_level_from_env())

    if logger.handlers:
        return None

    try:
        if log_dir is None:
            log_dir = Path(platformdirs.user_config_dir("vpassport", ensure_exists=True))
        log_file = log_dir / LOG_FILE_NAME
        handler = RotatingFileHandler(
            log_file,
            maxBytes=MAX_LOG_BYTES,
            backupCount=BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError:
        # Read-only config dir (sandboxed tests, CI)
        logger.addHandler(logging.NullHandler())
        return None

    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(handler)
    logger.debug("vpassport logging to %s", log_file)
    return log_file
