"""Structured logging configuration for Care Bot."""

import json
import logging
import logging.config
import logging.handlers
import os
from datetime import datetime, timezone
from pathlib import Path

from .config import DEFAULT_LOG_PATH

# Loggers of third-party clients that log every request at INFO.
_NOISY_LOGGERS = ("httpx", "httpcore", "anthropic")


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

        # Conversation the record belongs to
        room_id = getattr(record, "room_id", None)
        if room_id:
            log_data["room_id"] = room_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "context"):
            log_data["context"] = record.context

        return json.dumps(log_data, ensure_ascii=False, default=str)


def setup_logging(
    log_level: str | None = None,
    log_file: str | None = None,
    console_only: bool = False,
) -> None:
    """
    Setup structured logging for the webhook service.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
                   Defaults to LOG_LEVEL env var or INFO.
        log_file: Path to log file. Defaults to 04_logs/app.log.
        console_only: Skip the rotating file handler (containers, CI).
    """
    if log_level is None:
        log_level = os.getenv("LOG_LEVEL", "INFO")

    if log_file is None:
        log_file = str(DEFAULT_LOG_PATH)

    handlers: dict[str, dict] = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json",
            "stream": "ext://sys.stdout",
        },
    }
    if not console_only:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": log_file,
            "maxBytes": 10 * 1024 * 1024,  # 10 MB
            "backupCount": 5,
            "formatter": "json",
            "encoding": "utf-8",
        }

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "carebot.logging_config.JSONFormatter",
            },
        },
        "handlers": handlers,
        "loggers": {
            name: {"level": "WARNING"} for name in _NOISY_LOGGERS
        },
        "root": {
            "level": log_level.upper(),
            "handlers": list(handlers),
        },
    }

    logging.config.dictConfig(logging_config)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
