#!/usr/bin/env python3
"""Programmatic receiver example: forward pushes and issues to Slack.

This demonstrates using the webhook components directly instead of a template
script:

* load settings from `.env` / environment (WEBHOOK_SECRET, LOG_LEVEL)
* declare one method per handled event; the handler derives routing from
  the annotated payload types
* post a short message to a Slack incoming webhook for each delivery

Requires the `examples` extra (requests).
"""

from __future__ import annotations

import argparse
import logging
from typing import Sequence

import requests
import uvicorn

from github_webhook_runner.server.app import create_app
from github_webhook_runner.webhook.config import WebhookSettings
from github_webhook_runner.webhook.handler import WebhookHandler
from github_webhook_runner.webhook.logging import configure_logging
from github_webhook_runner.webhook.payloads import IssuesEvent, PushEvent

logger = logging.getLogger(__name__)


class SlackNotifier:
    def __init__(self, slack_url: str, *, timeout: float = 10.0) -> None:
        self._url = slack_url
        self._timeout = timeout
        self._session = requests.Session()

    def push(self, event: PushEvent) -> None:
        branch = event.ref.removeprefix("refs/heads/")
        self._post(
            f"{event.pusher.name} pushed {len(event.commits)} commit(s) "
            f"to {event.repository.full_name}@{branch}"
        )

    def issues(self, event: IssuesEvent) -> None:
        self._post(
            f"{event.sender.login} {event.action} issue #{event.issue.number} "
            f"in {event.repository.full_name}: {event.issue.title}"
        )

    def _post(self, text: str) -> None:
        resp = self._session.post(self._url, json={"text": text}, timeout=self._timeout)
        if resp.status_code >= 400:
            # Logged by the dispatcher; the delivery was already acknowledged.
            raise RuntimeError(f"Slack returned {resp.status_code}: {resp.text[:200]}")


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Forward GitHub events to Slack.")
    parser.add_argument("--slack-url", required=True, help="Slack incoming webhook URL")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8080)
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = WebhookSettings()
    configure_logging(settings.log_level)

    handler = WebhookHandler(settings.secret, SlackNotifier(args.slack_url))
    logger.info("Routing events", extra={"events": handler.routes.events()})

    uvicorn.run(create_app(handler), host=args.host, port=args.port, log_config=None)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
