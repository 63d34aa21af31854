"""Configuration for the webhook handler.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

Command-line flags take precedence; see `github_webhook_runner.server.main`.
"""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class WebhookSettings(BaseSettings):
    """Settings for verifying and dispatching webhook deliveries.

    Environment variables:
    - WEBHOOK_SECRET
    - WEBHOOK_EVENT_HEADER      (optional)
    - WEBHOOK_SIGNATURE_HEADER  (optional)
    - LOG_LEVEL                 (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `WebhookSettings(_env_file=path_to_env)`.
    """

    secret: str = Field(
        default="",
        validation_alias="WEBHOOK_SECRET",
        description="Shared secret GitHub uses to sign payloads",
    )
    event_header: str = Field(
        default="X-GitHub-Event",
        validation_alias="WEBHOOK_EVENT_HEADER",
        description="Request header carrying the event name",
    )
    signature_header: str = Field(
        default="X-Hub-Signature-256",
        validation_alias="WEBHOOK_SIGNATURE_HEADER",
        description="Request header carrying the 'sha256=<hex>' payload signature",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @model_validator(mode="after")
    def _require_headers(self) -> WebhookSettings:
        if not self.event_header.strip() or not self.signature_header.strip():
            raise ValueError("WEBHOOK_EVENT_HEADER and WEBHOOK_SIGNATURE_HEADER cannot be empty")
        return self

    @property
    def secret_bytes(self) -> bytes:
        return self.secret.encode("utf-8")
