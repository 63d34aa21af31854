"""Error taxonomy for the webhook runner.

- ConfigError: raised while constructing handlers, registries and scripts.
  Fatal; startup must stop.
- RequestError: a single request was rejected. Answered with a status code.
- DispatchError: raised after the response was sent. Only ever logged.
- ScriptDumpError: a failed shell script could not be dumped for diagnosis.
"""

from __future__ import annotations

from enum import Enum
from http import HTTPStatus


class Rejection(Enum):
    """Why a request was turned down, paired with the status code it maps to."""

    INVALID_METHOD = ("invalid HTTP method", HTTPStatus.METHOD_NOT_ALLOWED)
    INVALID_HEADERS = ("invalid HTTP headers", HTTPStatus.BAD_REQUEST)
    IO_ERROR = ("error reading request body", HTTPStatus.INTERNAL_SERVER_ERROR)
    INVALID_SIGNATURE = ("invalid signature header", HTTPStatus.UNAUTHORIZED)
    UNSUPPORTED_PAYLOAD = ("unsupported payload type", HTTPStatus.BAD_REQUEST)
    DECODE_ERROR = ("error decoding payload", HTTPStatus.BAD_REQUEST)

    def __init__(self, reason: str, status: HTTPStatus) -> None:
        self.reason = reason
        self.status = status


class WebhookError(Exception):
    """Base exception for webhook runner errors."""


class ConfigError(WebhookError):
    """Invalid construction-time configuration."""


class RequestError(WebhookError):
    """A request failed one of the verification steps."""

    def __init__(self, rejection: Rejection, detail: str = "") -> None:
        self.rejection = rejection
        self.detail = detail
        message = rejection.reason if not detail else f"{rejection.reason}: {detail}"
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return int(self.rejection.status)


class DispatchError(WebhookError):
    """A handler, template render or subprocess failed after the response."""


class ScriptError(DispatchError):
    """Rendering or executing a template script failed."""


class ScriptDumpError(ScriptError):
    """A failed script could not be written out for troubleshooting.

    Carries both the original failure and the dump failure.
    """

    def __init__(self, error: BaseException, dump_error: BaseException) -> None:
        self.error = error
        self.dump_error = dump_error
        super().__init__(f"{error} (failed to dump script file: {dump_error})")
