"""
Logging Configuration for calmap.

Provides centralized logging configuration with support for:
- Console and file logging
- Log rotation
- JSON and text formats
- Environment-based configuration

Library modules only create loggers with ``logging.getLogger(__name__)``;
handlers are installed by the command-line entry point or the host.
"""

import json
import logging
import logging.handlers
import os
import sys
import time
from datetime import datetime, timezone
from functools import wraps
from pathlib import Path
from typing import Optional


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra_fields"):
            log_data.update(record.extra_fields)

        return json.dumps(log_data)


class ColoredFormatter(logging.Formatter):
    """Colored formatter for console output."""

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors."""
        # Color a copy; the record is shared with the other handlers
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, "")
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def get_log_level(level_str: str) -> int:
    """Convert log level string to logging constant."""
    levels = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return levels.get(level_str.upper(), logging.INFO)


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    log_format: Optional[str] = None,
    enable_rotation: bool = True,
    max_size_mb: int = 10,
    backup_count: int = 5,
    enable_console: bool = True,
) -> logging.Logger:
    """
    Set up application-wide logging configuration.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file (if None, uses LOG_FILE env var or logs to console only)
        log_format: Log format type ('json' or 'text')
        enable_rotation: Enable log file rotation
        max_size_mb: Maximum log file size in MB before rotation
        backup_count: Number of backup log files to keep
        enable_console: Enable console logging

    Returns:
        Root logger instance
    """
    log_level = log_level or os.getenv("LOG_LEVEL", "INFO")
    log_file = log_file or os.getenv("LOG_FILE")
    log_format = log_format or os.getenv("LOG_FORMAT", "text")
    enable_rotation = str(os.getenv("LOG_ROTATION", str(enable_rotation))).lower() == "true"
    max_size_mb = int(os.getenv("LOG_MAX_SIZE_MB", max_size_mb))
    backup_count = int(os.getenv("LOG_BACKUP_COUNT", backup_count))

    root_logger = logging.getLogger()
    root_logger.setLevel(get_log_level(log_level))
    root_logger.handlers.clear()

    if log_format.lower() == "json":
        file_formatter = JSONFormatter()
        console_formatter = JSONFormatter()
    else:
        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        # Colors only when attached to a terminal
        if sys.stderr.isatty():
            console_formatter = ColoredFormatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%H:%M:%S",
            )
        else:
            console_formatter = file_formatter

    # Console output goes to stderr; stdout carries command results
    if enable_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(get_log_level(log_level))
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        if enable_rotation:
            file_handler = logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=max_size_mb * 1024 * 1024,
                backupCount=backup_count,
                encoding="utf-8",
            )
        else:
            file_handler = logging.FileHandler(log_path, encoding="utf-8")

        file_handler.setLevel(get_log_level(log_level))
        file_handler.setFormatter(file_formatter)
        root_logger.addHandler(file_handler)

    # Quiet third-party loggers
    logging.getLogger("openpyxl").setLevel(logging.WARNING)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def log_execution_time(logger: logging.Logger):
    """
    Decorator to log function execution time.

    Usage:
        @log_execution_time(logger)
        def my_function():
            pass
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            result = func(*args, **kwargs)
            elapsed = time.perf_counter() - start_time
            logger.debug(f"{func.__name__} executed in {elapsed:.3f}s")
            return result
        return wrapper
    return decorator
