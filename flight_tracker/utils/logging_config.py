"""
Logging configuration for Flight Price Tracker.

JSON output for production and log files, colored human-readable output
for the console during development.
"""

import json
import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

# Attributes every LogRecord carries; anything else is an "extra" field.
_RESERVED_FIELDS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}

_VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Each record becomes one JSON object with timestamp, level, logger,
    message, module, function and line, plus any extra fields attached to
    the record (for example by LogContext or get_logger).
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_FIELDS and not key.startswith("_"):
                log_data[key] = value

        return json.dumps(log_data, default=str)


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",
    }

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"

        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def setup_logging(
    level: str = "INFO",
    json_format: bool = False,
    log_file: str | None = None,
    console_output: bool = True,
    max_bytes: int = 10485760,  # 10MB
    backup_count: int = 5,
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL); unknown values fall back to INFO
        json_format: Use JSON format on the console (recommended for production)
        log_file: Optional path to a rotating log file, always written as JSON
        console_output: Enable console output
        max_bytes: Maximum size of log file in bytes before rotation
        backup_count: Number of rotated log files to keep

    Examples:
        >>> setup_logging(level="DEBUG")
        >>> setup_logging(level="INFO", json_format=True, log_file="logs/tracker.log")
    """
    level = level.upper()
    if level not in _VALID_LEVELS:
        level = "INFO"
    numeric_level = getattr(logging, level)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    if json_format:
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = ColoredFormatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(file_handler)

    # SQL echo is controlled by settings.debug on the engine itself.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(
        f"Logging configured: level={level}, json_format={json_format}, log_file={log_file}"
    )


def get_logger(name: str, extra_fields: Dict[str, Any] | None = None) -> logging.LoggerAdapter:
    """
    Get a logger that adds fixed extra fields to every record.

    Examples:
        >>> logger = get_logger(__name__, {"route": "ZRH-JFK"})
        >>> logger.info("Ranking flex window")
    """
    return logging.LoggerAdapter(logging.getLogger(name), extra_fields or {})


class LogContext:
    """
    Context manager that attaches fields to every record created inside it.

    Examples:
        >>> with LogContext({"flight_id": "42"}):
        ...     logging.getLogger(__name__).info("Computing weekday stats")
    """

    def __init__(self, context: Dict[str, Any]):
        self.context = context
        self.original_factory = None

    def __enter__(self):
        self.original_factory = logging.getLogRecordFactory()
        original = self.original_factory

        def record_factory(*args, **kwargs):
            record = original(*args, **kwargs)
            for key, value in self.context.items():
                setattr(record, key, value)
            return record

        logging.setLogRecordFactory(record_factory)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.original_factory:
            logging.setLogRecordFactory(self.original_factory)
