"""
Logging configuration for FamilyFolio backend.

Uses structlog on top of the standard logging module:
- Console output (always)
- Optional file output with weekly rotation and gzip compression
- JSON rendering (default) or human-readable console rendering

Log rotation: Weekly with 52 weeks (1 year) retention.
"""
import gzip
import logging
import logging.handlers
import shutil
import sys
from pathlib import Path
from typing import Any

import structlog
from structlog.types import EventDict

LOG_FILE_NAME = "familyfolio.log"


def get_log_directory() -> Path:
    """Get or create the log directory."""
    log_dir = Path(__file__).parent.parent.parent / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def add_log_level(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add upper-case log level to the event dict."""
    if method_name == "warn":
        method_name = "warning"
    event_dict["level"] = method_name.upper()
    return event_dict


def _get_rotated_filename(default_name: str) -> str:
    """
    Custom namer for rotated log files.

    Example: familyfolio.log.2025-11-28 -> familyfolio.log.2025-11-28.gz
    """
    return default_name + ".gz"


def _compress_rotated_file(source: str, dest: str) -> None:
    """Compress a rotated log file with gzip and drop the uncompressed copy."""
    with open(source, 'rb') as f_in:
        with gzip.open(dest, 'wb') as f_out:
            shutil.copyfileobj(f_in, f_out)

    Path(source).unlink()


def _build_file_handler(numeric_level: int) -> logging.Handler:
    log_file = get_log_directory() / LOG_FILE_NAME

    # W0 = rotate every Monday at midnight, keep 52 backups
    file_handler = logging.handlers.TimedRotatingFileHandler(
        filename=str(log_file),
        when="W0",
        interval=1,
        backupCount=52,
        encoding="utf-8",
        utc=True
        )
    file_handler.setLevel(numeric_level)
    file_handler.rotator = _compress_rotated_file
    file_handler.namer = _get_rotated_filename
    return file_handler


def configure_logging(
    log_level: str = "INFO",
    enable_file_logging: bool = True,
    log_format: str = "json",
    ) -> None:
    """
    Configure structured logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_file_logging: Whether to also write to the rotating log file
        log_format: "json" for machine-readable lines, "console" for humans
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    handlers: list[logging.Handler] = [console_handler]

    if enable_file_logging:
        handlers.append(_build_file_handler(numeric_level))

    # force=True replaces any handlers installed before us (uvicorn, pytest)
    logging.basicConfig(
        format="%(message)s",
        handlers=handlers,
        level=numeric_level,
        force=True
        )

    if log_format == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
        )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a logger instance (structured logger).

    Args:
        name: Logger name (typically __name__)

    Returns:
        structlog.stdlib.BoundLogger: Configured logger

    Usage:
        logger = get_logger(__name__)
        logger.info("message", key="value")
    """
    return structlog.get_logger(name)
