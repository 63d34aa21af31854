"""Structured logging configuration.

Uses standard library logging with a JSON formatter. Request and dispatch
details travel as `extra` fields; the delivery fields (remote, status, event)
become top-level keys.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

_DELIVERY_FIELDS = ("remote", "status", "event")

# Attributes every LogRecord carries; anything else came in through `extra=`.
_RESERVED_LOG_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", logging.NOTSET, "", 0, "", (), None))
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """A minimal JSON formatter for logging records."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_LOG_RECORD_ATTRS and not key.startswith("_")
        }
        for key in _DELIVERY_FIELDS:
            if key in extra:
                payload[key] = extra.pop(key)
        if extra:
            payload["extra"] = extra

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        # Payload types and paths are not always JSON-native.
        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: str) -> None:
    """Configure root logging with structured JSON output on stderr.

    Stdout is left alone; shell scripts forward their output to stderr too.
    """

    root = logging.getLogger()

    # Remove any existing handlers to avoid duplicate logs when re-configuring.
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(JsonFormatter())

    root.addHandler(handler)
    root.setLevel(level.upper())

    # uvicorn installs its own access log; ours already logs one line per request.
    logging.getLogger("uvicorn.access").setLevel(max(root.level, logging.WARNING))
