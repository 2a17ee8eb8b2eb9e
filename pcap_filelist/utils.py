"""
Utility helpers: directory setup and logging config.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = "pcap_filelist"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def ensure_dirs(*paths: Path) -> None:
    """Ensure each directory exists."""
    for p in paths:
        p.mkdir(parents=True, exist_ok=True)


def init_logging(level: str = "INFO", log_file: Optional[Union[str, Path]] = None) -> logging.Logger:
    """Configure a console logger + optional rotating file handler for the package."""
    log_level = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)
    logger.propagate = False  # avoid duplicate logs if root has handlers

    # Calling twice must not stack handlers.
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    # Console
    ch = logging.StreamHandler()
    ch.setLevel(log_level)
    ch.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(ch)

    # File (rotating)
    if log_file:
        path = Path(log_file)
        ensure_dirs(path.parent)
        fh = RotatingFileHandler(path, maxBytes=1_000_000, backupCount=5)
        fh.setLevel(log_level)
        fh.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(fh)

    return logger
