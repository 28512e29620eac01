"""Structured logging configuration."""
import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Optional


# Set per request by the HTTP middleware in tenant_api.main
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

# Passed through `extra=` by the service, repository and publishers
CONTEXT_FIELDS = ("actor", "tenant_id", "parent_tenant_id", "subject")

QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "httpx")


class JSONFormatter(logging.Formatter):
    """One JSON object per line, with tenant context lifted out of `extra`."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        request_id = getattr(record, "request_id", None) or request_id_var.get()
        if request_id:
            payload["request_id"] = request_id

        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                payload[name] = value

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def setup_logging(debug: bool = False) -> None:
    """Send all application logs to stdout as JSON."""
    level = logging.DEBUG if debug else logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter())

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
