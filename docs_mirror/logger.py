"""Logging setup: marker-prefixed console output, rotating file, per-run log."""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

LOGGER_NAME = "docs_mirror"

FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class MarkerFormatter(logging.Formatter):
    """Prefix console lines with a status marker instead of the level name."""

    MARKERS = {
        logging.DEBUG: " ",
        logging.INFO: "✓",
        logging.WARNING: "⚠",
        logging.ERROR: "✗",
        logging.CRITICAL: "✗",
    }

    def format(self, record: logging.LogRecord) -> str:
        marker = self.MARKERS.get(record.levelno, "✗")
        return f"{marker} {super().format(record)}"


def setup_logger(log_dir: Optional[str] = None, level: int = logging.INFO) -> logging.Logger:
    """Configure the package logger. Safe to call again to add the rotating file."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Console handler
    if not any(isinstance(h.formatter, MarkerFormatter) for h in logger.handlers):
        ch = logging.StreamHandler()
        ch.setLevel(level)
        ch.setFormatter(MarkerFormatter("%(message)s"))
        logger.addHandler(ch)

    # Rotating file handler (10MB per file, keep 5)
    if log_dir and not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        os.makedirs(log_dir, exist_ok=True)
        fh = RotatingFileHandler(
            os.path.join(log_dir, "docs_mirror.log"),
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
        )
        fh.setLevel(level)
        fh.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(fh)

    return logger


def add_run_log(logger: logging.Logger, log_file: str,
                level: int = logging.INFO) -> logging.FileHandler:
    """Attach a per-run log file; the caller removes it when the run ends."""
    rh = logging.FileHandler(log_file, encoding="utf-8")
    rh.setLevel(level)
    rh.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(rh)
    return rh
