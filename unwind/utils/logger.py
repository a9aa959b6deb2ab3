#!/usr/bin/env python3
"""
Logging utilities for unwind
"""

import logging
import sys
from pathlib import Path

import colorlog


class _StderrProxy:
    """Resolve sys.stderr at write time so redirected streams are honored"""

    def write(self, data: str) -> int:
        return sys.stderr.write(data)

    def flush(self) -> None:
        sys.stderr.flush()

    def isatty(self) -> bool:
        return sys.stderr.isatty()


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
COLOR_FORMAT = "%(log_color)s%(levelname)-8s%(reset)s %(name)s - %(message)s"
LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}


def setup_logger(
    name: str = "unwind", level: int = logging.INFO, log_dir: Path | None = None
) -> logging.Logger:
    """Setup logger with console and file handlers"""

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    # Console handler
    console_handler = logging.StreamHandler(_StderrProxy())
    console_handler.setLevel(level)
    console_handler.setFormatter(colorlog.ColoredFormatter(COLOR_FORMAT, log_colors=LOG_COLORS))
    logger.addHandler(console_handler)

    # File handler (optional)
    try:
        log_dir = log_dir or Path.home() / ".unwind" / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_dir / "unwind.log")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)

    except OSError:
        # Fallback to console only
        logger.debug("File logging unavailable, using console only")

    return logger


def get_logger(name: str = "unwind") -> logging.Logger:
    """Get logger instance"""
    return logging.getLogger(name)


def configure_logging_levels(verbose: bool, quiet: bool) -> None:
    """Configure logging levels based on verbosity settings."""
    if quiet:
        logging.getLogger("unwind").setLevel(logging.ERROR)
        return

    level = logging.INFO if verbose else logging.WARNING
    logging.getLogger("unwind").setLevel(level)
