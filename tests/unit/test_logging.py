"""Unit tests for structured logging."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import pytest

from github_webhook_runner.webhook.logging import JsonFormatter, configure_logging


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="github_webhook_runner.webhook.handler",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="Rejected webhook delivery",
        args=(),
        exc_info=None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_lifts_delivery_fields() -> None:
    line = JsonFormatter().format(
        _record(remote="127.0.0.1", status=401, event="push", reason="invalid signature")
    )

    data = json.loads(line)
    assert data["level"] == "WARNING"
    assert data["message"] == "Rejected webhook delivery"
    assert (data["remote"], data["status"], data["event"]) == ("127.0.0.1", 401, "push")
    assert data["extra"] == {"reason": "invalid signature"}


def test_json_formatter_delivery_fields_only() -> None:
    data = json.loads(JsonFormatter().format(_record(event="ping")))

    assert data["event"] == "ping"
    assert "extra" not in data
    assert "remote" not in data


def test_json_formatter_stringifies_unknown_types() -> None:
    data = json.loads(JsonFormatter().format(_record(path=Path("/tmp/dumps"))))

    assert data["extra"] == {"path": "/tmp/dumps"}


def test_json_formatter_without_extra() -> None:
    data = json.loads(JsonFormatter().format(_record()))

    assert "extra" not in data
    assert "exception" not in data


def test_json_formatter_includes_exception() -> None:
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = _record()
        record.exc_info = sys.exc_info()

    data = json.loads(JsonFormatter().format(record))

    assert "RuntimeError: boom" in data["exception"]


def test_configure_logging_replaces_handlers(monkeypatch: pytest.MonkeyPatch) -> None:
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [logging.NullHandler()])
    monkeypatch.setattr(root, "level", root.level)

    configure_logging("debug")

    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, JsonFormatter)
    assert root.level == logging.DEBUG
    assert logging.getLogger("uvicorn.access").level == logging.WARNING
