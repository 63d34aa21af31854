"""HMAC-SHA256 payload signatures.

GitHub sends `X-Hub-Signature-256: sha256=<hex digest>`. The prefix is required;
the hex part is decoded and compared with the raw digest in constant time.
"""

from __future__ import annotations

import hashlib
import hmac

SIGNATURE_PREFIX = "sha256="


def _key(secret: bytes | str) -> bytes:
    return secret.encode("utf-8") if isinstance(secret, str) else secret


def digest(body: bytes, secret: bytes | str) -> bytes:
    return hmac.new(_key(secret), body, hashlib.sha256).digest()


def sign(body: bytes, secret: bytes | str) -> str:
    """Return the signature header value for `body`."""

    return SIGNATURE_PREFIX + digest(body, secret).hex()


def verify(body: bytes, signature: str | bytes, secret: bytes | str) -> bool:
    if isinstance(signature, bytes):
        try:
            signature = signature.decode("ascii")
        except UnicodeDecodeError:
            return False
    if not signature.startswith(SIGNATURE_PREFIX):
        return False
    try:
        expected = bytes.fromhex(signature[len(SIGNATURE_PREFIX) :])
    except ValueError:
        return False
    return hmac.compare_digest(digest(body, secret), expected)
