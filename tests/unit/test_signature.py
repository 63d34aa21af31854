"""Unit tests for HMAC payload signatures."""

from __future__ import annotations

import hashlib
import hmac

import pytest

from github_webhook_runner.webhook.signature import sign, verify


@pytest.mark.parametrize("body", [b"", b"{}", b'{"zen": "Design for failure."}', bytes(range(256))])
def test_verify_accepts_own_signature(body: bytes) -> None:
    assert verify(body, sign(body, "s3cret"), "s3cret")
    assert not verify(body, sign(body, "other"), "s3cret")


def test_sign_matches_github_format() -> None:
    body = b'{"action": "opened"}'
    expected = hmac.new(b"key", body, hashlib.sha256).hexdigest()

    assert sign(body, "key") == f"sha256={expected}"
    assert sign(body, b"key") == sign(body, "key")


def test_verify_rejects_tampered_body() -> None:
    signature = sign(b'{"ref": "refs/heads/main"}', "key")

    assert not verify(b'{"ref": "refs/heads/evil"}', signature, "key")


@pytest.mark.parametrize(
    "signature",
    [
        "",
        "sha1=0123",
        "sha256=",
        "sha256=not-hex",
        # Raw hex digest without the required prefix.
        hmac.new(b"key", b"{}", hashlib.sha256).hexdigest(),
    ],
)
def test_verify_rejects_malformed_headers(signature: str) -> None:
    assert not verify(b"{}", signature, "key")


def test_verify_accepts_bytes_header() -> None:
    assert verify(b"{}", sign(b"{}", "key").encode("ascii"), b"key")
    assert not verify(b"{}", b"\xff\xfe", b"key")
