"""Structured Logging — JSON formatter, setup and request logging middleware.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (pizza_id, error_code, path, ...) surfaced when present
    - setup_logging is idempotent: handlers it installed are replaced, not stacked

Design Decisions:
    - JSONFormatter on stdlib logging: zero extra dependencies, full control
    - Optional file sink rotates at midnight (one file per day)
    - Request lines logged at DEBUG so they stay quiet at the default INFO level
"""

import json
import logging
import os
import time
from datetime import datetime, timezone
from logging.handlers import TimedRotatingFileHandler

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

_EXTRA_FIELDS = (
    "pizza_id", "count", "error_code", "path", "method", "status_code",
    "duration_ms", "request_host", "request_scheme", "outcome",
)

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def _make_formatter(fmt: str) -> logging.Formatter:
    if fmt == "json":
        return JSONFormatter()
    return logging.Formatter(_TEXT_FORMAT)


def setup_logging(
    level: str = "INFO", fmt: str = "json", log_file: str | None = None,
) -> None:
    """Configure root logging for the application."""
    for handler in list(logging.root.handlers):
        if getattr(handler, "_pizzastore", False):
            logging.root.removeHandler(handler)
            handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        directory = os.path.dirname(log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        handlers.append(TimedRotatingFileHandler(
            log_file, when="midnight", encoding="utf-8",
        ))

    formatter = _make_formatter(fmt)
    for handler in handlers:
        handler.setFormatter(formatter)
        handler._pizzastore = True
        logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Emit one "Handled <path>" line per request."""

    def __init__(self, app, logger: logging.Logger | None = None):
        super().__init__(app)
        self.logger = logger or logging.getLogger("pizzastore.requests")

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        self.logger.debug(
            f"Handled {request.url.path}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - start) * 1000, 2),
                "request_host": request.headers.get("host"),
                "request_scheme": request.url.scheme,
            },
        )
        return response
