"""
Logging Configuration
=====================
All modules log through `logging.getLogger(__name__)`, so their records
propagate to the "curveeditor" logger configured here. Graph rebuilds and
drags log at DEBUG; project load/save and playback start/stop at INFO.

Usage:
    from curveeditor.logging_config import setup_logging
    setup_logging(level=logging.DEBUG, log_file="curveeditor.log")
"""
import logging
import sys
from typing import Optional


PACKAGE_LOGGER = "curveeditor"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach a stdout handler (and optionally a file handler) to the package logger.

    Calling it again replaces the previous handlers, so tests and the CLI
    can reconfigure the level freely.

    Args:
        level: Logging level for the logger and its handlers.
        log_file: Optional path; the file is truncated on every setup.

    Returns:
        The "curveeditor" logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug(f"Logging initialized at level {logging.getLevelName(level)}"
                 + (f", writing to {log_file}" if log_file else ""))
    return logger
