"""Logging configuration for ftpsession.

Provides centralized logging with secret redaction to ensure passwords
never reach log output.
"""

import logging
import re
import sys
from pathlib import Path
from typing import Optional


LOGGER_NAME = "ftpsession"

# Secret patterns to redact from logs
SECRET_PATTERNS = [
    # Password in various formats
    (re.compile(r'(password["\s:=]+)[^\s,}\]]+', re.IGNORECASE), r'\1[REDACTED]'),
    (re.compile(r'(passwd["\s:=]+)[^\s,}\]]+', re.IGNORECASE), r'\1[REDACTED]'),
    (re.compile(r'(pass["\s:=]+)[^\s,}\]]+', re.IGNORECASE), r'\1[REDACTED]'),
    # FTP URLs with credentials
    (re.compile(r'ftp://[^:/\s]+:[^@\s]+@'), 'ftp://[REDACTED]@'),
]


class SecretRedactingFormatter(logging.Formatter):
    """Formatter that redacts secrets from log messages."""

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record, redacting any secrets."""
        message = super().format(record)
        for pattern, replacement in SECRET_PATTERNS:
            message = pattern.sub(replacement, message)
        return message


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    console: bool = True
) -> logging.Logger:
    """
    Configure ftpsession logging with secret redaction.

    Args:
        level: Logging level (default INFO)
        log_file: Optional file path for log output
        console: Whether to output to console (default True)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Clear any existing handlers
    logger.handlers.clear()

    formatter = SecretRedactingFormatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (default is the package logger)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
