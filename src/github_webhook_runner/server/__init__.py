"""FastAPI server adapter for github-webhook-runner.

Design intent:
- Keep verification and dispatch in `github_webhook_runner.webhook.*`
- Keep serving concerns (routing, listener settings, CLI) here
"""

from __future__ import annotations

__all__ = ["create_app"]

from github_webhook_runner.server.app import create_app
