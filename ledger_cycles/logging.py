"""Structured logging configuration for ledger-cycles."""

import logging
import sys
from typing import Any

# Ledger identifiers passed through ``extra=`` and lifted into JSON records
CONTEXT_FIELDS = ("user_id", "card_id", "group_id", "entry_id", "invoice_month")


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
) -> None:
    """Configure logging for ledger-cycles.

    Parameters
    ----------
    level : str
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    format_type : str
        Format type: "standard" or "json".
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if format_type == "json":
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logging.getLogger("ledger_cycles").setLevel(log_level)

    # Faker logs locale loading at DEBUG
    logging.getLogger("faker").setLevel(logging.WARNING)


class JsonFormatter(logging.Formatter):
    """JSON log formatter for structured logging.

    Ledger identifiers given as ``extra={"card_id": ...}`` on a log call
    become top-level keys; a nested ``extra={"extra": {...}}`` dict is
    merged as well.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        import json
        from datetime import datetime, timezone

        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in CONTEXT_FIELDS:
            value = record.__dict__.get(key)
            if value is not None:
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra"):
            log_data.update(record.extra)

        return json.dumps(log_data, default=str)


def get_logger(name: str, **context: Any) -> logging.Logger | logging.LoggerAdapter:
    """Get a logger, optionally bound to ledger identifiers.

    Parameters
    ----------
    name : str
        Logger name (usually __name__).
    **context
        Identifiers such as ``user_id`` or ``card_id`` attached to every
        record the returned logger emits.

    Returns
    -------
    logging.Logger | logging.LoggerAdapter
        The named logger, wrapped in an adapter when context is given.
    """
    logger = logging.getLogger(name)
    if context:
        return logging.LoggerAdapter(logger, context)
    return logger
