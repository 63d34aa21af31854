"""Functions available inside template scripts.

    env(name)              environment variable, "" when unset
    exec(cmd, *args)       run a command, return its stripped stdout
    sleep(duration)        block for a duration such as "1.5s" or "2m30s"
    log(*values)           log values on one line
    logf(format, *values)  log a %-formatted line

`log` and `logf` return "" so they can be used as statements. `exec` and
`sleep` raise on failure, which aborts the render.
"""

from __future__ import annotations

import logging
import os
import re
import subprocess
import time
from collections.abc import Callable
from typing import Any

from github_webhook_runner.webhook.errors import ScriptError

_DURATION_UNITS: dict[str, float] = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")

# Go-style verbs people carry over from other template languages.
_VERBS = {"%v": "%s", "%q": "%r"}


def parse_duration(value: str) -> float:
    """Parse a duration string ("300ms", "-1.5h", "2h45m") into seconds.

    Raises:
        ValueError: the string is not a valid duration.
    """

    text = value.strip()
    sign = 1.0
    if text[:1] in ("+", "-"):
        sign = -1.0 if text[0] == "-" else 1.0
        text = text[1:]
    if text == "0":
        return 0.0
    if not text:
        raise ValueError(f"invalid duration {value!r}")

    total = 0.0
    pos = 0
    while pos < len(text):
        match = _DURATION_PART.match(text, pos)
        if match is None:
            raise ValueError(f"invalid duration {value!r}")
        number, unit = match.groups()
        total += float(number) * _DURATION_UNITS[unit]
        pos = match.end()
    return sign * total


def _format(format_: str, values: tuple[Any, ...]) -> str:
    for verb, replacement in _VERBS.items():
        format_ = format_.replace(verb, replacement)
    try:
        return format_ % values
    except (TypeError, ValueError):
        return " ".join([format_, *(str(v) for v in values)])


def make_functions(logger: logging.Logger) -> dict[str, Callable[..., Any]]:
    """Build the template globals; `log`/`logf` write to `logger`."""

    def env(name: str) -> str:
        return os.environ.get(name, "")

    def exec_(cmd: str, *args: object) -> str:
        argv = [cmd, *(str(a) for a in args)]
        try:
            proc = subprocess.run(argv, capture_output=True, check=True)
        except subprocess.CalledProcessError as e:
            stderr = e.stderr.decode("utf-8", errors="replace").strip() if e.stderr else ""
            raise ScriptError(f"exec {cmd}: {e}" + (f": {stderr}" if stderr else "")) from e
        except OSError as e:
            raise ScriptError(f"exec {cmd}: {e}") from e
        return proc.stdout.decode("utf-8", errors="replace").strip()

    def sleep(duration: str) -> str:
        time.sleep(max(parse_duration(duration), 0.0))
        return ""

    def log(*values: object) -> str:
        if values:
            logger.info(" ".join(str(v) for v in values))
        return ""

    def logf(format_: str, *values: object) -> str:
        if not format_:
            return ""
        logger.info(_format(format_, values) if values else format_)
        return ""

    return {"env": env, "exec": exec_, "sleep": sleep, "log": log, "logf": logf}
