"""FastAPI app factory.

The app is a thin wrapper: every path and every method goes to the
`WebhookHandler`, which owns method checks and status codes itself.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import Response

from github_webhook_runner import __version__
from github_webhook_runner.webhook.handler import WebhookHandler

logger = logging.getLogger(__name__)

_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app(handler: WebhookHandler) -> FastAPI:
    app = FastAPI(
        title="GitHub Webhook Runner",
        version=__version__,
        description="Verifies GitHub webhook deliveries and dispatches them to handlers.",
        # No docs endpoints: every path belongs to the webhook.
        openapi_url=None,
        docs_url=None,
        redoc_url=None,
    )

    # Expose the handler for tests and embedding code.
    app.state.webhook = handler

    async def receive(request: Request) -> Response:
        return await handler(request)

    app.add_api_route(
        "/{path:path}",
        receive,
        methods=_METHODS,
        include_in_schema=False,
        name="webhook",
    )

    logger.debug("Webhook routes", extra={"routes": handler.routes.events()})
    return app
