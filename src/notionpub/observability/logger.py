"""Structured JSON logger for notionpub.

Every log record is emitted as a single-line JSON object::

    {"ts": "2025-07-01T12:00:00.123456+00:00", "level": "INFO",
     "logger": "notionpub.publisher", "message": "Page created",
     "op": "publish", "page_id": "abc123", "blocks": 100}

Usage::

    from notionpub.observability import get_logger

    log = get_logger("notionpub.publisher")
    log.info("Page created", extra={"extra_fields": {"page_id": "abc"}})
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any


class StructuredFormatter(logging.Formatter):
    """Format log records as single-line JSON objects.

    Guaranteed keys are ``ts`` (ISO-8601 UTC), ``level``, ``logger`` and
    ``message``.  Fields passed via ``extra={"extra_fields": {...}}`` are
    merged into the top-level object; ``exception`` and ``stack_info`` are
    added when present.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra_fields: dict[str, Any] | None = getattr(record, "extra_fields", None)
        if extra_fields is not None:
            log_entry.update(extra_fields)

        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)

        if record.stack_info:
            log_entry["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(log_entry, default=str, ensure_ascii=False)


LOG_LEVEL_ENV = "NOTIONPUB_LOG_LEVEL"

# One handler per logger name so repeated get_logger calls stay idempotent.
_configured_loggers: set[str] = set()


def _resolve_level(level: int | str | None) -> int:
    """Turn *level* (or ``$NOTIONPUB_LOG_LEVEL`` when ``None``) into an int.

    Unknown names fall back to ``logging.INFO``.
    """
    if isinstance(level, int):
        return level
    name = (level if level is not None else os.getenv(LOG_LEVEL_ENV, "INFO")).upper()
    resolved = getattr(logging, name, None)
    if not isinstance(resolved, int):
        return logging.INFO
    return resolved


def get_logger(
    name: str = "notionpub",
    *,
    level: int | str | None = None,
    stream: Any | None = None,
) -> logging.Logger:
    """Get or create a structured JSON logger.

    Parameters
    ----------
    name:
        Logger name, e.g. ``"notionpub.transport"``.
    level:
        Minimum log level as an ``int`` or a case-insensitive name.  When
        omitted, ``$NOTIONPUB_LOG_LEVEL`` is consulted, then ``INFO``.
    stream:
        Output stream for the handler.  Defaults to ``sys.stderr``.

    Returns
    -------
    logging.Logger
        The logger, with a :class:`StructuredFormatter` handler attached on
        first use only.
    """
    logger = logging.getLogger(name)

    if name not in _configured_loggers:
        logger.setLevel(_resolve_level(level))

        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        logger.propagate = False

        _configured_loggers.add(name)

    return logger
