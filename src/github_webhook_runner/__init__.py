"""GitHub Webhook Runner.

Receives signed GitHub webhook deliveries, verifies and decodes them, and
dispatches each to a handler object, typically a template script that can
run shell commands.
"""

__version__ = "0.1.0"

from github_webhook_runner.webhook.handler import WebhookHandler

__all__ = ["__version__", "WebhookHandler"]
