"""Test configuration and fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from github_webhook_runner.webhook.signature import sign

SECRET = "secret123"


@pytest.fixture
def secret() -> str:
    return SECRET


@pytest.fixture
def push_body() -> bytes:
    """A trimmed-down push delivery."""
    return json.dumps(
        {
            "ref": "refs/heads/main",
            "before": "9049f1265b7d61be4a8904a9a27120d2064dab3b",
            "after": "0d1a26e67d8f5eaf1f6ba5c57fc3c7d91ac0fd1c",
            "commits": [
                {
                    "id": "0d1a26e67d8f5eaf1f6ba5c57fc3c7d91ac0fd1c",
                    "message": "Update README.md",
                    "timestamp": "2015-05-05T19:40:15-04:00",
                    "author": {"name": "baxterthehacker", "email": "baxter@example.com"},
                }
            ],
            "repository": {
                "id": 35129377,
                "name": "public-repo",
                "full_name": "baxterthehacker/public-repo",
                "owner": {"name": "baxterthehacker", "email": "baxter@example.com"},
                "created_at": 1430869212,
                "pushed_at": 1430869217,
            },
            "pusher": {"name": "baxterthehacker", "email": "baxter@example.com"},
            "sender": {"login": "baxterthehacker", "id": 6752317},
        }
    ).encode("utf-8")


@pytest.fixture
def ping_body() -> bytes:
    return json.dumps(
        {
            "zen": "Keep it logically awesome.",
            "hook_id": 42,
            "hook": {"id": 42, "name": "web", "active": True, "events": ["push", "issues"]},
        }
    ).encode("utf-8")


@pytest.fixture
def gollum_body() -> bytes:
    return json.dumps(
        {"pages": [{"page_name": "Home", "title": "Home", "action": "created", "sha": "91ea1b"}]}
    ).encode("utf-8")


@pytest.fixture
def signed_headers(secret: str) -> Callable[[str, bytes], dict[str, str]]:
    """Build valid delivery headers for an event and body."""

    def _headers(event: str, body: bytes) -> dict[str, str]:
        return {
            "X-GitHub-Event": event,
            "X-Hub-Signature-256": sign(body, secret),
            "Content-Type": "application/json",
        }

    return _headers


@pytest.fixture
def write_script(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a template script into a temporary directory."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / "scripts" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
