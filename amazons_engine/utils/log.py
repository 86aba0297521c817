"""Logging setup for engine runs."""

import logging
import sys
from pathlib import Path
from typing import Optional

LOGGER_NAME = "amazons_engine"
DEFAULT_LOG_DIR = Path.home() / ".amazons_engine"


def setup_logger(
    debug: bool = True,
    log_dir: Optional[Path] = None,
    console: bool = False,
) -> logging.Logger:
    """
    Setup file-based logger for engine debugging.

    All module loggers live under "amazons_engine", so configuring that
    logger captures search, agent and board messages alike.

    Args:
        debug: If True, log at DEBUG level; otherwise INFO level
        log_dir: Directory for engine.log (default: ~/.amazons_engine)
        console: Also log to stderr

    Returns:
        Configured logger instance
    """
    log_dir = Path(log_dir) if log_dir is not None else DEFAULT_LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "engine.log"

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S'
    )

    handler = logging.FileHandler(log_file, mode='w')
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    if console:
        stream = logging.StreamHandler(sys.stderr)
        stream.setFormatter(formatter)
        logger.addHandler(stream)

    return logger
