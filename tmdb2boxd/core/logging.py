"""
Logging setup for tmdb2boxd.

One stdout handler on the root logger. Records carry the correlation ID of
the request being served; with structured logging enabled each record is a
single JSON line, otherwise a plain text line.
"""
import json
import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from tmdb2boxd.core.config import Settings, get_settings

correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")

PLAIN_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] [%(correlation_id)s] - %(message)s"
PLAIN_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Chatty libraries kept at WARNING
QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore")


class CorrelationIdFilter(logging.Filter):
    """
    Stamp records with the current correlation ID.

    Optional context is merged into the record's ``data`` mapping without
    clobbering keys passed through ``extra={"data": ...}`` at the call site.
    """

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__()
        self.context = dict(context or {})

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id.get()
        if self.context:
            data = getattr(record, "data", None)
            record.data = {**self.context, **data} if isinstance(data, dict) else dict(self.context)
        return True


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class StructuredLogFormatter(logging.Formatter):
    """Renders each record as one JSON object."""

    def payload(self, record: logging.LogRecord) -> Dict[str, Any]:
        entry: Dict[str, Any] = {
            "timestamp": _utc_timestamp(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        request_id = getattr(record, "correlation_id", "") or correlation_id.get()
        if request_id:
            entry["correlation_id"] = request_id

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, _ = record.exc_info
            entry["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "traceback": self.formatException(record.exc_info),
            }

        data = getattr(record, "data", None)
        if isinstance(data, dict):
            entry.update(data)
        return entry

    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(self.payload(record), default=str)


def build_handler(structured: bool) -> logging.Handler:
    """A stdout handler with the correlation filter and the chosen formatter."""
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    if structured:
        handler.setFormatter(StructuredLogFormatter())
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT, datefmt=PLAIN_DATE_FORMAT))
    return handler


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Replace the root handlers with a single stdout handler."""
    settings = settings or get_settings()

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    root_logger.addHandler(build_handler(settings.ENABLE_STRUCTURED_LOGGING))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str, **context: Any) -> logging.Logger:
    """
    Module logger carrying the correlation ID.

    Args:
        name: Logger name, usually ``__name__``
        **context: Fields added to the ``data`` of every record

    Returns:
        logging.Logger: The named logger
    """
    logger = logging.getLogger(name)
    if not any(isinstance(f, CorrelationIdFilter) for f in logger.filters):
        logger.addFilter(CorrelationIdFilter(context))
    return logger


def set_correlation_id(corr_id: Optional[str] = None) -> str:
    """Bind a correlation ID (a fresh UUID when none is given) to the current context."""
    corr_id = corr_id or str(uuid.uuid4())
    correlation_id.set(corr_id)
    return corr_id
