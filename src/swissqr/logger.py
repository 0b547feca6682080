"""Logging set-up for swissqr.

The kernel never logs; the API and CLI layers log through loggers
namespaced under ``swissqr.``. Libraries embedding swissqr keep their own
configuration; only the CLI calls ``setup_logging``.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

APP_LOGGER_NAME = "swissqr"

DEFAULT_FORMAT = "%(asctime)s [%(levelname).4s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logging.getLogger(APP_LOGGER_NAME).addHandler(logging.NullHandler())


def setup_logging(level: str = "WARNING", log_file: Optional[str] = None) -> None:
    """
    Configure the ``swissqr`` logger tree.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR).
        log_file: Optional path of a file that receives the same records.
    """
    root = logging.getLogger(APP_LOGGER_NAME)

    # Drop handlers from an earlier set-up so records are not duplicated;
    # the NullHandler installed at import stays
    for handler in root.handlers[:]:
        if isinstance(handler, logging.NullHandler):
            continue
        root.removeHandler(handler)
        handler.close()

    root.setLevel(getattr(logging, level.upper(), logging.WARNING))
    formatter = logging.Formatter(DEFAULT_FORMAT, datefmt=DATE_FORMAT)

    # stderr, stdout carries command output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_path), encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under ``swissqr.<name>``."""
    if name == APP_LOGGER_NAME or name.startswith(APP_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{APP_LOGGER_NAME}.{name}")
