from __future__ import annotations

import logging
import sys
from typing import TextIO

"""Application logger for the matrix_grid CLI.

Output lines look like ``<LABEL> <message>`` where LABEL is one of
DEBUG|INFO|WARN|ERROR|SUMMARY. SUMMARY (25) sits between INFO and WARNING and
carries the single refresh summary line, so it survives a WARN-only filter.

Module loggers (``logging.getLogger(__name__)`` inside matrix_grid) are
children of the ``matrix_grid`` logger and write through its one handler.
"""

__all__ = [
    "LOGGER_NAME",
    "SUMMARY_LEVEL",
    "LabeledFormatter",
    "setup_logging",
    "enable_debug",
    "log_summary",
    "reset_logging",
]

LOGGER_NAME = "matrix_grid"
SUMMARY_LEVEL = 25

_configured: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    LEVEL_LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
        SUMMARY_LEVEL: "SUMMARY",
    }

    def format(self, record: logging.LogRecord) -> str:
        label = self.LEVEL_LABELS.get(record.levelno, record.levelname)
        return f"{label} {record.getMessage()}"


def setup_logging(level: int = logging.INFO, stream: TextIO | None = None) -> logging.Logger:
    """Attach the labeled handler to the ``matrix_grid`` logger.

    Later calls return the already configured logger unchanged until
    reset_logging() is called.

    Args:
        level: Initial level of the logger and its handler
        stream: Output stream (default: sys.stdout at call time)
    """
    global _configured

    if _configured is not None:
        return _configured

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.setLevel(level)
    # root 側のハンドラで二重出力しない
    logger.propagate = False

    _configured = logger
    return logger


def enable_debug() -> logging.Logger:
    """Lower the logger and its handlers to DEBUG (``--debug``)."""
    logger = setup_logging()
    logger.setLevel(logging.DEBUG)
    for handler in logger.handlers:
        handler.setLevel(logging.DEBUG)
    return logger


def log_summary(message: str) -> None:
    setup_logging().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Detach the handler and forget the configured logger (tests)."""
    global _configured
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    _configured = None
