"""Logging configuration for the API server and the CLI.

Formats:
  pretty:  "2026-01-01 12:00:00,000 INFO app.request: [GET] /health → 200 (1ms)"
  compact: "INFO [GET] /health → 200 (1ms)"
  json:    one JSON object per line, extra fields included
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any

from config.settings import LoggingSettings

_PRETTY_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_COMPACT_FORMAT = "%(levelname)s %(message)s"


class JSONFormatter(logging.Formatter):
    """Format log records as JSON for structured logging."""

    # Standard LogRecord attributes that should not be included as extra fields
    _STANDARD_ATTRS = {
        "name", "msg", "args", "created", "filename", "funcName", "levelname",
        "levelno", "lineno", "module", "msecs", "message", "pathname",
        "process", "processName", "relativeCreated", "thread", "threadName",
        "exc_info", "exc_text", "stack_info", "taskName",
    }

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # logger.info("...", extra={"status": 200}) lands in record.__dict__
        for key, value in record.__dict__.items():
            if key not in self._STANDARD_ATTRS and not callable(value):
                log_data[key] = value

        return json.dumps(log_data, default=str)


def _build_formatter(fmt: str) -> logging.Formatter:
    if fmt == "json":
        return JSONFormatter()
    if fmt == "compact":
        return logging.Formatter(_COMPACT_FORMAT)
    return logging.Formatter(_PRETTY_FORMAT)


def configure_logging(settings: LoggingSettings, level: str | None = None) -> None:
    """Install handlers on the root logger.

    `level` overrides settings.level (the CLI passes "debug" for --verbose).
    """
    formatter = _build_formatter(settings.format)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if settings.file is not None:
        handlers.append(logging.FileHandler(settings.file, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel((level or settings.level).upper())
    root_logger.handlers = handlers

    # Request logging is done by RequestLogMiddleware; avoid duplicate access lines
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
