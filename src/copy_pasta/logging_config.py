from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any


_RESERVED_RECORD_FIELDS = set(logging.makeLogRecord({}).__dict__.keys())
_SENSITIVE_MARKERS = ("secret", "access_key", "accesskey", "password")
MASK = "****"


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _record_context(record: logging.LogRecord) -> dict[str, Any]:
    """Fields passed through ``extra=``, with credentials masked."""
    context: dict[str, Any] = {}
    for key, value in record.__dict__.items():
        if key in _RESERVED_RECORD_FIELDS or key.startswith("_"):
            continue
        if any(marker in key.lower() for marker in _SENSITIVE_MARKERS):
            value = MASK
        context[key] = value
    return context


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class JsonFormatter(logging.Formatter):
    """One JSON object per line, for log shippers (LOG_JSON=1)."""

    def __init__(self, service: str) -> None:
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": _utc_now().isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "service": self.service,
            "message": record.getMessage(),
        }
        context = _record_context(record)
        if context:
            payload["context"] = context
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, separators=(",", ":"))


class TextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        parts = [
            _utc_now().strftime("%Y-%m-%dT%H:%M:%S%z"),
            record.levelname,
            record.name,
            record.getMessage(),
        ]
        parts.extend(f"{key}={value!r}" for key, value in sorted(_record_context(record).items()))
        line = " ".join(parts)
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def configure_logging(level: str | None = None, service: str = "copy-pasta") -> None:
    # stdout carries pasted content, so logs always go to stderr
    level_name = level or os.getenv("LOG_LEVEL", "WARNING")
    resolved_level = getattr(logging, level_name.upper(), logging.WARNING)

    handler = logging.StreamHandler(stream=sys.stderr)
    if _parse_bool(os.getenv("LOG_JSON"), default=False):
        handler.setFormatter(JsonFormatter(service=service))
    else:
        handler.setFormatter(TextFormatter())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(resolved_level)
    # botocore logs request signing details at DEBUG
    logging.getLogger("botocore").setLevel(max(resolved_level, logging.INFO))
    logging.captureWarnings(True)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
