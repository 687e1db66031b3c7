"""Structured logging configuration."""
from __future__ import annotations

import json
import logging
import sys
import time
import traceback
from typing import Any, Dict

import structlog

from .settings import get_settings


class JsonFormatter(logging.Formatter):
    def format(self, record):  # noqa: D401
        base: Dict[str, Any] = {
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created)),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for attr in ("invoice_id", "event"):
            if hasattr(record, attr):
                base[attr] = getattr(record, attr)
        if record.exc_info:
            base["exc_info"] = "".join(
                traceback.format_exception(*record.exc_info))
        return json.dumps(base, ensure_ascii=False, default=str)


def configure_logging(level: str | None = None) -> None:
    """Configure structlog and the stdlib root logger for JSON output."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(default=str),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level or get_settings().LOG_LEVEL)


__all__ = ["JsonFormatter", "configure_logging"]
