"""
Logging configuration for the Weather Auth API.

This module provides structured logging configuration with proper formatting,
log levels, and handlers for both development and production environments.
A redaction filter keeps tokens, passwords and API keys out of every handler.
"""

import logging
import re
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from app.config import settings

REDACTED = "***REDACTED***"

SENSITIVE_PATTERNS = [
    (re.compile(r"(bearer\s+)([a-zA-Z0-9_\-\.]{20,})", re.IGNORECASE), rf"\1{REDACTED}"),
    (re.compile(r"(token\s*[:=]\s*['\"]?)([a-zA-Z0-9_\-\.]{20,})", re.IGNORECASE), rf"\1{REDACTED}"),
    (re.compile(r"(password\s*[:=]\s*['\"]?)([^'\"\s,}]+)", re.IGNORECASE), rf"\1{REDACTED}"),
    (re.compile(r"(api[_-]?key\s*[:=]\s*['\"]?)([^'\"\s&,}]+)", re.IGNORECASE), rf"\1{REDACTED}"),
    (re.compile(r"([?&]key=)([^&\s]+)"), rf"\1{REDACTED}"),
    (re.compile(r"(\$argon2[a-z]*\$)[^\s'\"]+"), rf"\1{REDACTED}"),
]


def sanitize_message(message: str) -> str:
    """Replace secrets in a log message with a placeholder."""
    for pattern, replacement in SENSITIVE_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


class SensitiveDataFilter(logging.Filter):
    """Redacts secrets from records before any handler formats them."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        sanitized = sanitize_message(message)
        if sanitized != message:
            record.msg = sanitized
            record.args = None
        return True


def setup_logging():
    """
    Configure application logging.

    Sets up console and file handlers with appropriate formatting
    based on environment (DEBUG vs production).
    """
    # Create logs directory if it doesn't exist
    log_dir = Path(settings.LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)

    # Configure root logger
    logger = logging.getLogger()
    logger.setLevel(settings.LOG_LEVEL)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    # Define log format
    if settings.DEBUG:
        # Detailed format for development
        log_format = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
    else:
        # Structured format for production (easier to parse)
        log_format = logging.Formatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

    sensitive_filter = SensitiveDataFilter()

    # Console handler (stdout)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)
    console_handler.setFormatter(log_format)
    console_handler.addFilter(sensitive_filter)
    logger.addHandler(console_handler)

    # File handler for all logs
    file_handler = RotatingFileHandler(
        log_dir / "weather_api.log",
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=5,
        encoding="utf-8"
    )
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(log_format)
    file_handler.addFilter(sensitive_filter)
    logger.addHandler(file_handler)

    # File handler for errors only
    error_handler = RotatingFileHandler(
        log_dir / "weather_api_errors.log",
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=5,
        encoding="utf-8"
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(log_format)
    error_handler.addFilter(sensitive_filter)
    logger.addHandler(error_handler)

    # Reduce noise from some verbose libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    # httpx logs full request URLs, which include the weather API key
    logging.getLogger("httpx").setLevel(logging.WARNING)

    logger.info("=" * 60)
    logger.info(f"{settings.PROJECT_NAME} - Logging initialized")
    logger.info(f"Log Level: {settings.LOG_LEVEL}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info("=" * 60)

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
