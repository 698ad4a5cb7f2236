import json
import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Optional

from catalog_api.core.config import get_settings

# Request-scoped id, echoed in the X-Correlation-ID header
correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")

CONSOLE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] [%(correlation_id)s] - %(message)s"

# Loggers that would otherwise log every request or upstream call at INFO
NOISY_LOGGERS = ("uvicorn.access", "httpx", "httpcore")


class StructuredLogFormatter(logging.Formatter):
    """
    One JSON object per record.

    Fields passed as ``extra={"data": {...}}`` (operation, platform, status
    code, ...) are merged into the top level of the entry.
    """

    def __init__(self, service: str):
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "service": self.service,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        corr_id = getattr(record, "correlation_id", None) or correlation_id.get()
        if corr_id and corr_id != "-":
            entry["correlation_id"] = corr_id

        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        data = getattr(record, "data", None)
        if isinstance(data, dict):
            entry.update(data)

        return json.dumps(entry, default=str)


class CorrelationIdFilter(logging.Filter):
    """Stamps the current correlation id on every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id.get() or "-"
        return True


def configure_logging() -> None:
    """
    Install a single stdout handler on the root logger.

    JSON output when ENABLE_STRUCTURED_LOGGING is set, a bracketed console
    line otherwise. Safe to call more than once.
    """
    settings = get_settings()
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    if settings.ENABLE_STRUCTURED_LOGGING:
        handler.setFormatter(StructuredLogFormatter(service=settings.PROJECT_NAME))
    else:
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def set_correlation_id(corr_id: Optional[str] = None) -> str:
    """
    Bind a correlation id to the current request context.

    Args:
        corr_id: Id received from the caller; a uuid4 is generated if empty

    Returns:
        str: The id now in effect
    """
    corr_id = corr_id or str(uuid.uuid4())
    correlation_id.set(corr_id)
    return corr_id
