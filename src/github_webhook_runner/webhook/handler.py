"""Verified dispatch of GitHub webhook deliveries.

Each request walks a fixed sequence of checks; the first failing check answers
the request and ends it:

    method -> headers -> content length -> body -> signature -> event type
    -> JSON decode -> 200 OK -> dispatch

Dispatch happens after the response is sent (Starlette background task handing
off to a `Dispatcher`), so the caller only ever learns that the delivery was
authentic and well-formed, never whether handling it succeeded.

Response bodies carry nothing but the status phrase.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from http import HTTPStatus

from pydantic import BaseModel, ValidationError
from starlette.background import BackgroundTask
from starlette.requests import ClientDisconnect, Request
from starlette.responses import PlainTextResponse, Response

from github_webhook_runner.webhook.capabilities import RoutingTable, resolve_capabilities
from github_webhook_runner.webhook.dispatch import Dispatcher, ThreadDispatcher
from github_webhook_runner.webhook.errors import ConfigError, Rejection, RequestError
from github_webhook_runner.webhook.registry import DEFAULT_REGISTRY, PayloadRegistry
from github_webhook_runner.webhook.signature import verify

logger = logging.getLogger(__name__)

MAX_PAYLOAD_LEN = 1024 * 1024 * 1024  # 1 GiB

DEFAULT_EVENT_HEADER = "X-GitHub-Event"
DEFAULT_SIGNATURE_HEADER = "X-Hub-Signature-256"


def _remote(request: Request) -> str:
    if request.client is None:
        return ""
    return f"{request.client.host}:{request.client.port}"


def _status_response(status: HTTPStatus, background: BackgroundTask | None = None) -> Response:
    return PlainTextResponse(status.phrase, status_code=int(status), background=background)


class WebhookHandler:
    """ASGI-friendly request handler: `response = await handler(request)`.

    Args:
        secret: HMAC key shared with GitHub. Must not be empty.
        receiver: object whose methods handle events (see `capabilities`), or a
            prebuilt `RoutingTable`.
        registry: event name <-> payload schema table.
        dispatcher: runs handler code after the response; defaults to one
            thread per event.
        on_verified: optional `(event, body)` hook run through the dispatcher
            for every accepted delivery, e.g. a `PayloadDumper`.
    """

    def __init__(
        self,
        secret: str | bytes,
        receiver: object,
        *,
        registry: PayloadRegistry = DEFAULT_REGISTRY,
        dispatcher: Dispatcher | None = None,
        event_header: str = DEFAULT_EVENT_HEADER,
        signature_header: str = DEFAULT_SIGNATURE_HEADER,
        on_verified: Callable[[str, bytes], object] | None = None,
    ) -> None:
        if not secret:
            raise ConfigError("webhook: empty secret")
        self._secret = secret.encode("utf-8") if isinstance(secret, str) else bytes(secret)
        self._registry = registry
        self._routes = (
            receiver
            if isinstance(receiver, RoutingTable)
            else resolve_capabilities(receiver, registry)
        )
        self._dispatcher: Dispatcher = dispatcher or ThreadDispatcher()
        self._event_header = event_header
        self._signature_header = signature_header
        self._on_verified = on_verified

    @property
    def routes(self) -> RoutingTable:
        return self._routes

    @property
    def registry(self) -> PayloadRegistry:
        return self._registry

    async def __call__(self, request: Request) -> Response:
        event = request.headers.get(self._event_header, "")
        content_length = request.headers.get("content-length", "")
        try:
            payload, body = await self._verify(request, event)
        except RequestError as e:
            logger.warning(
                "Rejected webhook delivery",
                extra={
                    "remote": _remote(request),
                    "status": e.status_code,
                    "event": event,
                    "content_length": content_length,
                    "reason": str(e),
                },
            )
            return _status_response(e.rejection.status)

        return _status_response(
            HTTPStatus.OK,
            background=BackgroundTask(self._hand_off, _remote(request), event, payload, body),
        )

    async def _verify(self, request: Request, event: str) -> tuple[BaseModel, bytes]:
        if request.method != "POST":
            raise RequestError(Rejection.INVALID_METHOD)

        signature = request.headers.get(self._signature_header, "")
        if not event or not signature:
            raise RequestError(Rejection.INVALID_HEADERS)

        try:
            length = int(request.headers.get("content-length", ""))
        except ValueError:
            raise RequestError(Rejection.INVALID_HEADERS, "missing Content-Length") from None
        if length <= 0 or length > MAX_PAYLOAD_LEN:
            raise RequestError(Rejection.INVALID_HEADERS, f"Content-Length={length}")

        body = await self._read_body(request, length)

        if not verify(body, signature, self._secret):
            raise RequestError(Rejection.INVALID_SIGNATURE)

        model = self._registry.type_for(event)
        if model is None:
            raise RequestError(Rejection.UNSUPPORTED_PAYLOAD, event)

        try:
            payload = model.model_validate_json(body)
        except ValidationError as e:
            detail = f"{e.error_count()} validation error(s)"
            raise RequestError(Rejection.DECODE_ERROR, detail) from e

        return payload, body

    @staticmethod
    async def _read_body(request: Request, length: int) -> bytes:
        """Read at most `length` bytes of the request body."""

        buf = bytearray()
        try:
            async for chunk in request.stream():
                buf += chunk
                if len(buf) >= length:
                    break
        except (ClientDisconnect, OSError) as e:
            raise RequestError(Rejection.IO_ERROR, type(e).__name__) from e
        return bytes(buf[:length])

    def _hand_off(self, remote: str, event: str, payload: BaseModel, body: bytes) -> None:
        if self._on_verified is not None:
            self._dispatcher.submit(self._on_verified, event, body)
        self._dispatcher.submit(self.dispatch, remote, event, payload)

    def dispatch(self, remote: str, event: str, payload: BaseModel) -> None:
        """Invoke the handler matching `event`. Runs on a dispatcher thread."""

        route = self._routes.lookup(event)
        if route is not None:
            route.invoke(event, payload)
            logger.info(
                "Dispatched webhook delivery",
                extra={
                    "remote": remote,
                    "status": 200,
                    "event": event,
                    "payload_type": type(payload).__name__,
                    "handler": route.name,
                },
            )
            return

        if event == "ping":
            hook = getattr(payload, "hook", None)
            logger.info(
                "Received ping",
                extra={
                    "remote": remote,
                    "status": 200,
                    "event": event,
                    "events": list(getattr(hook, "events", [])),
                },
            )
            return

        logger.debug("No handler for event", extra={"remote": remote, "event": event})
