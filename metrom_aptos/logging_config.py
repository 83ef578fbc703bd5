"""
Centralized logging configuration for the Metrom operator commands.
Console output is plain text by default; LOG_FORMAT=json switches to one JSON
object per line, which is what the CI deployment jobs collect.
"""

import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone
from typing import Optional

from . import constants

ROOT_LOGGER = "metrom_aptos"


class StructuredFormatter(logging.Formatter):
    """
    Custom formatter that outputs structured log messages with context.
    """

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        # Step context attached by the progress reporter
        if hasattr(record, "step"):
            log_entry["step"] = record.step
        if hasattr(record, "status"):
            log_entry["status"] = record.status
        if hasattr(record, "context"):
            log_entry["context"] = record.context

        return json.dumps(log_entry)


class ConsoleFormatter(logging.Formatter):
    def __init__(self):
        super().__init__("%(message)s")

    def format(self, record):
        message = super().format(record)
        if record.levelno >= logging.ERROR:
            return f"error: {message}"
        if record.levelno == logging.WARNING:
            return f"warning: {message}"
        return message


def setup_logging(
    level: str = constants.LOG_LEVEL,
    log_format: str = constants.LOG_FORMAT,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: "text" for human readable console output, "json" for structured lines
        log_file: Optional path of a rotating log file (always structured)

    Returns:
        The configured package logger
    """
    if log_format not in ("text", "json"):
        raise ValueError(f"Unknown log format {log_format!r}; expected 'text' or 'json'")

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False

    # Clear any existing handlers
    logger.handlers.clear()

    # Progress goes to stderr so stdout stays clean for command output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(StructuredFormatter() if log_format == "json" else ConsoleFormatter())
    logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
        )
        file_handler.setFormatter(StructuredFormatter())
        logger.addHandler(file_handler)

    return logger
