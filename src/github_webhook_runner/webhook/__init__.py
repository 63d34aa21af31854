"""Signed GitHub webhook verification and dispatch.

- `WebhookHandler` verifies and decodes deliveries, then hands them off
- `resolve_capabilities` maps events to handler methods
- `PayloadRegistry` maps event names to payload schemas
"""

from github_webhook_runner.webhook.capabilities import (
    Route,
    RoutingTable,
    resolve_capabilities,
)
from github_webhook_runner.webhook.dispatch import Dispatcher, InlineDispatcher, ThreadDispatcher
from github_webhook_runner.webhook.dump import PayloadDumper
from github_webhook_runner.webhook.errors import (
    ConfigError,
    DispatchError,
    Rejection,
    RequestError,
    ScriptDumpError,
    ScriptError,
    WebhookError,
)
from github_webhook_runner.webhook.handler import WebhookHandler
from github_webhook_runner.webhook.registry import DEFAULT_REGISTRY, WILDCARD, PayloadRegistry
from github_webhook_runner.webhook.signature import sign, verify

__all__ = [
    "DEFAULT_REGISTRY",
    "WILDCARD",
    "ConfigError",
    "DispatchError",
    "Dispatcher",
    "InlineDispatcher",
    "PayloadDumper",
    "PayloadRegistry",
    "Rejection",
    "RequestError",
    "Route",
    "RoutingTable",
    "ScriptDumpError",
    "ScriptError",
    "ThreadDispatcher",
    "WebhookError",
    "WebhookHandler",
    "resolve_capabilities",
    "sign",
    "verify",
]
