"""CLI entrypoint: serve a template script as a GitHub webhook.

    github-webhook-runner [-cert file -key file] [-addr address] [-dump dir]
                          -secret key script [-name value ...]

Each verified delivery is rendered through `script` (see
`github_webhook_runner.script.engine`). Trailing `-name value` pairs are passed
to the script as `Args`.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from pydantic import ValidationError

from github_webhook_runner import __version__
from github_webhook_runner.script.engine import Script
from github_webhook_runner.server.app import create_app
from github_webhook_runner.server.config import ServerSettings
from github_webhook_runner.webhook.config import WebhookSettings
from github_webhook_runner.webhook.dump import PayloadDumper
from github_webhook_runner.webhook.errors import ConfigError
from github_webhook_runner.webhook.handler import WebhookHandler
from github_webhook_runner.webhook.logging import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="github-webhook-runner",
        allow_abbrev=False,
        description=(
            "Starts a web server which listens on GitHub's POST requests. The payload of "
            "each request is verified against its signature, decoded into the matching "
            "event model and then applied to the template script."
        ),
    )
    parser.add_argument(
        "--version", action="version", version=f"github-webhook-runner {__version__}"
    )
    parser.add_argument("-cert", dest="cert", default=None, help="Certificate file.")
    parser.add_argument("-key", dest="key", default=None, help="Private key file.")
    parser.add_argument(
        "-addr",
        dest="addr",
        default=None,
        help="Network address to listen on. Default is :8080 for HTTP and :8443 for HTTPS.",
    )
    parser.add_argument(
        "-secret",
        dest="secret",
        default=None,
        help="GitHub secret value used for signing payloads (or WEBHOOK_SECRET).",
    )
    parser.add_argument(
        "-dump",
        dest="dump",
        default=None,
        help="Dump verified payloads into this directory.",
    )
    parser.add_argument("script", help="Template script handling every event.")
    parser.add_argument(
        "script_args",
        nargs=argparse.REMAINDER,
        help="Flag-style '-name value' pairs passed to the script as Args.",
    )
    return parser


def _overrides(**values: object) -> dict[str, object]:
    # Only explicit flags override environment / .env settings.
    return {k: v for k, v in values.items() if v is not None}


def build_app(
    webhook_settings: WebhookSettings,
    server_settings: ServerSettings,
    script_path: Path,
    script_args: list[str],
) -> FastAPI:
    """Wire script, handler and optional dumper into an app.

    Raises:
        ConfigError: empty secret, bad script arguments or unparsable script.
    """

    script = Script(script_path, script_args)
    dumper = (
        PayloadDumper(server_settings.dump_dir) if server_settings.dump_dir is not None else None
    )
    handler = WebhookHandler(
        webhook_settings.secret,
        script,
        event_header=webhook_settings.event_header,
        signature_header=webhook_settings.signature_header,
        on_verified=dumper,
    )
    if dumper is not None:
        logger.info("Dumping verified payloads", extra={"path": str(dumper.directory)})
    return create_app(handler)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        parser.print_help(sys.stderr)
        return 1
    args = parser.parse_args(argv)

    try:
        webhook_settings = WebhookSettings(**_overrides(WEBHOOK_SECRET=args.secret))
        server_settings = ServerSettings(
            **_overrides(
                WEBHOOK_ADDR=args.addr,
                WEBHOOK_CERT_FILE=args.cert,
                WEBHOOK_KEY_FILE=args.key,
                WEBHOOK_DUMP_DIR=args.dump,
            )
        )
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error:", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(webhook_settings.log_level)

    try:
        app = build_app(webhook_settings, server_settings, Path(args.script), args.script_args)
        host, port = server_settings.listen_address()
    except (ConfigError, ValueError) as e:
        print(e, file=sys.stderr)
        return 1

    logger.info("Listening", extra={"addr": f"{host}:{port}", "tls": server_settings.tls})
    uvicorn.run(
        app,
        host=host,
        port=port,
        ssl_certfile=str(server_settings.cert_file) if server_settings.cert_file else None,
        ssl_keyfile=str(server_settings.key_file) if server_settings.key_file else None,
        log_config=None,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
