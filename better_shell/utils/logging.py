"""
Logging configuration and utilities.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional


class Colors:
    """ANSI escape codes used for terminal output."""
    RESET = "\x1b[0m"
    BRIGHT = "\x1b[1m"
    DIM = "\x1b[2m"
    RED = "\x1b[31m"
    GREEN = "\x1b[32m"
    YELLOW = "\x1b[33m"
    BLUE = "\x1b[34m"
    CYAN = "\x1b[36m"


class ConsoleFormatter(logging.Formatter):
    """Compact console format: bare messages, prefixed only for warnings and errors."""

    LEVEL_STYLES = {
        logging.DEBUG: (Colors.DIM, ""),
        logging.WARNING: (Colors.YELLOW, "⚠ "),
        logging.ERROR: (Colors.RED, "✗ "),
        logging.CRITICAL: (Colors.RED, "✗ "),
    }

    def __init__(self, use_color: bool = True):
        super().__init__("%(message)s")
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color, prefix = self.LEVEL_STYLES.get(record.levelno, ("", ""))
        if self.use_color and color:
            return f"{color}{prefix}{message}{Colors.RESET}"
        return f"{prefix}{message}"


def setup_root_logger(log_file: Optional[Path] = None,
                     level: str = "INFO",
                     max_bytes: int = 10 * 1024 * 1024,
                     backup_count: int = 5):
    """
    Set up the root logger for the application.

    The console gets the compact user-facing format; the log file gets the
    detailed one.

    Args:
        log_file: Optional log file path
        level: Console logging level
        max_bytes: Rotate the log file past this size
        backup_count: Number of rotated log files to keep
    """
    root_logger = logging.getLogger()

    # Clear any existing handlers
    root_logger.handlers.clear()

    root_logger.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, level.upper()))
    console_handler.setFormatter(ConsoleFormatter(use_color=sys.stdout.isatty()))
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=max_bytes,
                backupCount=backup_count
            )
        except OSError as e:
            root_logger.warning(f"Cannot write log file {log_file}: {e}")
        else:
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
            ))
            root_logger.addHandler(file_handler)

    # Set levels for third-party loggers
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def log_header(logger: logging.Logger, title: str, width: int = 60) -> None:
    """Log a section header framed by rules."""
    logger.info("=" * width)
    logger.info(title)
    logger.info("=" * width)
