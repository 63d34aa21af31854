"""Configuration for serving the webhook over HTTP(S).

Without a certificate the server listens on plain HTTP (0.0.0.0:8080 by
default); with `-cert` and `-key` it serves HTTPS (0.0.0.0:8443 by default).
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_HTTP_ADDR = "0.0.0.0:8080"
DEFAULT_HTTPS_ADDR = "0.0.0.0:8443"


class ServerSettings(BaseSettings):
    """Listener settings.

    Environment variables:
    - WEBHOOK_ADDR        (optional)
    - WEBHOOK_CERT_FILE   (optional, requires WEBHOOK_KEY_FILE)
    - WEBHOOK_KEY_FILE    (optional, requires WEBHOOK_CERT_FILE)
    - WEBHOOK_DUMP_DIR    (optional) dump verified payloads here
    """

    addr: str = Field(
        default="",
        validation_alias="WEBHOOK_ADDR",
        description="host:port to listen on; empty picks the default for HTTP or HTTPS",
    )
    cert_file: Path | None = Field(default=None, validation_alias="WEBHOOK_CERT_FILE")
    key_file: Path | None = Field(default=None, validation_alias="WEBHOOK_KEY_FILE")

    dump_dir: Path | None = Field(
        default=None,
        validation_alias="WEBHOOK_DUMP_DIR",
        description="Directory where every verified payload body is written",
    )

    model_config = SettingsConfigDict(env_prefix="", env_file=".env", extra="ignore")

    @model_validator(mode="after")
    def _require_cert_and_key(self) -> ServerSettings:
        if (self.cert_file is None) != (self.key_file is None):
            raise ValueError("both -cert and -key flags must be provided")
        return self

    @property
    def tls(self) -> bool:
        return self.cert_file is not None

    def listen_address(self) -> tuple[str, int]:
        """Split the effective address into (host, port)."""

        addr = self.addr or (DEFAULT_HTTPS_ADDR if self.tls else DEFAULT_HTTP_ADDR)
        host, sep, port = addr.rpartition(":")
        if not sep or not port.isdigit():
            raise ValueError(f"invalid listen address: {addr!r}")
        return (host.strip("[]") or "0.0.0.0"), int(port)
