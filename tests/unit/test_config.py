"""Unit tests for configuration."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from github_webhook_runner.server.config import ServerSettings
from github_webhook_runner.webhook.config import WebhookSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "WEBHOOK_SECRET",
        "WEBHOOK_EVENT_HEADER",
        "WEBHOOK_SIGNATURE_HEADER",
        "WEBHOOK_ADDR",
        "WEBHOOK_CERT_FILE",
        "WEBHOOK_KEY_FILE",
        "WEBHOOK_DUMP_DIR",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


def test_webhook_settings_defaults() -> None:
    settings = WebhookSettings(_env_file=None)

    assert settings.secret == ""
    assert settings.event_header == "X-GitHub-Event"
    assert settings.signature_header == "X-Hub-Signature-256"
    assert settings.log_level == "INFO"


def test_webhook_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WEBHOOK_SECRET", "s3cret")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = WebhookSettings(_env_file=None)

    assert settings.secret_bytes == b"s3cret"
    assert settings.log_level == "debug"


def test_webhook_settings_from_env_file(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("WEBHOOK_SECRET=from-file\n", encoding="utf-8")

    assert WebhookSettings(_env_file=env_file).secret == "from-file"


def test_webhook_settings_init_overrides_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WEBHOOK_SECRET", "from-env")

    assert WebhookSettings(_env_file=None, WEBHOOK_SECRET="from-flag").secret == "from-flag"


def test_webhook_settings_reject_empty_headers() -> None:
    with pytest.raises(ValidationError):
        WebhookSettings(_env_file=None, WEBHOOK_SIGNATURE_HEADER=" ")


def test_server_settings_default_addresses() -> None:
    assert ServerSettings(_env_file=None).listen_address() == ("0.0.0.0", 8080)

    tls = ServerSettings(_env_file=None, WEBHOOK_CERT_FILE="cert.pem", WEBHOOK_KEY_FILE="key.pem")
    assert tls.tls is True
    assert tls.listen_address() == ("0.0.0.0", 8443)


@pytest.mark.parametrize(
    ("addr", "expected"),
    [
        (":9000", ("0.0.0.0", 9000)),
        ("127.0.0.1:9000", ("127.0.0.1", 9000)),
        ("[::]:9000", ("::", 9000)),
    ],
)
def test_server_settings_listen_address(addr: str, expected: tuple[str, int]) -> None:
    assert ServerSettings(_env_file=None, WEBHOOK_ADDR=addr).listen_address() == expected


@pytest.mark.parametrize("addr", ["localhost", "localhost:http"])
def test_server_settings_invalid_address(addr: str) -> None:
    with pytest.raises(ValueError):
        ServerSettings(_env_file=None, WEBHOOK_ADDR=addr).listen_address()


def test_server_settings_require_cert_and_key() -> None:
    with pytest.raises(ValidationError, match="both -cert and -key"):
        ServerSettings(_env_file=None, WEBHOOK_CERT_FILE="cert.pem")
