"""JSON structured logging for envquack.

Reports go to stdout, so log records are written to stderr. Uses
python-json-logger for JSON formatting.
"""

import logging
import sys
from typing import Any

from pythonjsonlogger.json import JsonFormatter

from packages.common.config import get_config


class CustomJsonFormatter(JsonFormatter):
    """Custom JSON formatter with additional fields.

    Adds timestamp, level, module, function and line to all log records.
    """

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        """Add custom fields to the JSON log record.

        Args:
            log_record: The dictionary that will be serialized to JSON.
            record: The original logging.LogRecord.
            message_dict: Dictionary from the log message.
        """
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = record.created
        log_record["level"] = record.levelname
        log_record["module"] = record.module
        log_record["function"] = record.funcName
        log_record["line"] = record.lineno


def setup_logging(level: str | None = None, log_format: str | None = None) -> None:
    """Configure logging for the application.

    Sets up:
    - JSON formatter (or a plain text one when ``log_format`` is "text")
    - Console handler writing to stderr
    - Log level from config or parameter

    Args:
        level: Optional log level override (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               If not provided, uses ENVQUACK_LOG_LEVEL from config.
        log_format: Optional format override ("json" or "text").

    Example:
        >>> setup_logging("DEBUG")
        >>> logger = get_logger(__name__)
        >>> logger.info("Parsed compose file")
    """
    config = get_config()
    log_level = (level or config.log_level).upper()
    fmt = log_format or config.log_format

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)

    if fmt == "text":
        formatter: logging.Formatter = logging.Formatter(
            "%(levelname)s %(name)s: %(message)s"
        )
    else:
        formatter = CustomJsonFormatter("%(timestamp)s %(level)s %(module)s %(function)s %(message)s")
    console_handler.setFormatter(formatter)

    root_logger.addHandler(console_handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the given module.

    Args:
        name: The logger name (typically __name__ from the calling module).

    Returns:
        logging.Logger: Configured logger instance.
    """
    return logging.getLogger(name)


__all__ = ["CustomJsonFormatter", "get_logger", "setup_logging"]
