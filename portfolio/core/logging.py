"""
Logging configuration for the portfolio contact form.

Services log structured events through ``log_event``: the message is the
event name and the event fields ride on the record. In development (DEBUG)
they are appended to a human-readable line, everywhere else they are merged
into a single-line JSON record.
"""

import json
import logging
import sys
from typing import Any, Dict, Optional

from portfolio.core.config import settings

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _event_fields(record: logging.LogRecord) -> Dict[str, Any]:
    fields = getattr(record, "extra", None)
    return fields if isinstance(fields, dict) else {}


class JSONFormatter(logging.Formatter):
    """One JSON object per line, with event fields at the top level."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Keep exception traces on one line with \n preserved in the string
        if record.exc_info:
            exception_text = self.formatException(record.exc_info)
            log_data["exception"] = exception_text.replace("\n", "\\n")
            exc_type_name: str | None = (
                record.exc_info[0].__name__ if record.exc_info[0] else None
            )
            if exc_type_name:
                log_data["exc_type"] = exc_type_name

        if record.stack_info:
            log_data["stack_info"] = record.stack_info.replace("\n", "\\n")

        log_data.update(_event_fields(record))

        return json.dumps(log_data, default=str)


class EventFormatter(logging.Formatter):
    """Plain development format with event fields as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = {k: v for k, v in _event_fields(record).items() if k != "event"}
        if not fields:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in fields.items())
        return f"{line} [{pairs}]"


def log_event(
    logger: logging.Logger, level: int, event: str, **fields: Any
) -> None:
    """
    Log a structured event.

    Args:
        logger: Logger to emit on
        level: logging level constant
        event: Event name, also used as the message
        **fields: Event data; never pass submitted names, addresses or text
    """
    logger.log(level, event, extra={"extra": {"event": event, **fields}})


def setup_logging(log_level: Optional[str] = None) -> None:
    """
    Configure the root logger with a single stdout handler.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
                  If None, uses settings.LOG_LEVEL
    """
    if log_level is None:
        log_level = settings.LOG_LEVEL or ("DEBUG" if settings.DEBUG else "INFO")

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    if settings.DEBUG:
        formatter: logging.Formatter = EventFormatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt=DATE_FORMAT,
        )
    else:
        formatter = JSONFormatter(datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logging.getLogger("asyncio").setLevel(logging.WARNING)

    log_event(
        logging.getLogger(__name__),
        logging.INFO,
        "logging_configured",
        level=log_level.upper(),
    )


def get_logger(name: str) -> logging.Logger:
    """Named logger; typically called with __name__."""
    return logging.getLogger(name)
