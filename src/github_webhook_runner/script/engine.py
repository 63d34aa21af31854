"""Template scripts: render a Jinja2 template against each webhook event.

A script file is rendered with three variables:

    Name     the event name, e.g. "push"
    Payload  the decoded payload model
    Args     extra `-name value` arguments given on the command line, keyed by
             name with the first letter upper-cased (`-token x` -> Args.Token)

Files ending in `.sh` or `.bash` are shell scripts: the rendered text is piped
into bash. Any other file is rendered into the output sink (discarded by
default) and is useful for its side effects (`exec`, `log`, ...).

Example, logging who pushed where:

    {% if Name == "push" %}
      {{ logf("%s pushed to %s", Payload.pusher.email, Payload.repository.name) }}
    {% endif %}
"""

from __future__ import annotations

import logging
import os
import subprocess
import tempfile
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import IO, Any

import jinja2

from github_webhook_runner.script.funcs import make_functions
from github_webhook_runner.webhook.errors import ConfigError, ScriptDumpError, ScriptError

logger = logging.getLogger(__name__)

SHELL_SUFFIXES = (".sh", ".bash")
_STDERR_FD = 2


class ScriptMode(str, Enum):
    DIRECT = "direct"
    SHELL = "shell"


@dataclass(frozen=True, slots=True)
class ScriptEvent:
    """What a template sees."""

    name: str
    payload: Any
    args: dict[str, str] = field(default_factory=dict)

    def context(self) -> dict[str, Any]:
        return {"Name": self.name, "Payload": self.payload, "Args": self.args}


def parse_args(args: Sequence[str]) -> dict[str, str]:
    """Turn `["-token", "x", "-channel", "y"]` into `{"Token": "x", "Channel": "y"}`."""

    if len(args) % 2 == 1:
        raise ConfigError("number of arguments for template script must be even")
    parsed: dict[str, str] = {}
    for name, value in zip(args[::2], args[1::2], strict=True):
        if len(name) < 2 or not name.startswith("-"):
            raise ConfigError(f"invalid flag name: {name}")
        parsed[name[1].upper() + name[2:]] = value
    return parsed


def _discard() -> IO[str]:
    return open(os.devnull, "w", encoding="utf-8")  # noqa: SIM115 (closed after render)


class Script:
    """A parsed template script, reusable across events.

    Args:
        file: template path; its suffix selects the mode.
        args: flag-style `name value` pairs exposed as `Args`.
        output: factory for the direct-mode output sink. The sink is closed
            after each render if it has a `close` method.
        dump_dir: where failed shell scripts are written; defaults to the
            system temp directory.
        interpreter: shell used in shell mode.
        log: logger receiving `log`/`logf` output and errors.
    """

    def __init__(
        self,
        file: str | Path,
        args: Sequence[str] = (),
        *,
        output: Callable[[], IO[str]] | None = None,
        dump_dir: str | Path | None = None,
        interpreter: str = "bash",
        log: logging.Logger | None = None,
    ) -> None:
        self.path = Path(file)
        self.args = MappingProxyType(parse_args(args))
        self.mode = (
            ScriptMode.SHELL if self.path.name.endswith(SHELL_SUFFIXES) else ScriptMode.DIRECT
        )
        self._output = output or _discard
        self._dump_dir = Path(dump_dir) if dump_dir is not None else None
        self._interpreter = interpreter
        self._log = log or logger

        env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(self.path.parent)),
            autoescape=False,
            keep_trailing_newline=True,
        )
        env.globals.update(make_functions(self._log))
        try:
            self._template = env.get_template(self.path.name)
        except jinja2.TemplateNotFound as e:
            raise ConfigError(f"template script not found: {self.path}") from e
        except jinja2.TemplateSyntaxError as e:
            raise ConfigError(f"{self.path}:{e.lineno}: {e.message}") from e
        except (jinja2.TemplateError, OSError) as e:
            raise ConfigError(f"{self.path}: {e}") from e

    @property
    def shell(self) -> bool:
        return self.mode is ScriptMode.SHELL

    def __repr__(self) -> str:
        return f"Script({str(self.path)!r}, mode={self.mode.value})"

    def webhook(self, event: str, payload: Any) -> None:
        """Wildcard handler entry point."""

        self.run(ScriptEvent(name=event, payload=payload, args=dict(self.args)))

    def run(self, event: ScriptEvent) -> None:
        """Render and execute; failures are logged, never raised."""

        try:
            self.execute(event)
        except ScriptError as e:
            self._log.error(
                "Template script error: %s",
                e,
                extra={"script": str(self.path), "event": event.name},
            )

    def execute(self, event: ScriptEvent) -> None:
        if self.mode is ScriptMode.SHELL:
            self._run_shell(event)
        else:
            sink = self._output()
            try:
                self._render_into(sink, event)
            finally:
                close = getattr(sink, "close", None)
                if callable(close):
                    close()

    def render(self, event: ScriptEvent) -> str:
        """Render the template into a string."""

        try:
            return self._template.render(event.context())
        except ScriptError:
            raise
        except Exception as e:
            raise ScriptError(f"{self.path.name}: {e}") from e

    def _render_into(self, sink: IO[str], event: ScriptEvent) -> None:
        try:
            self._template.stream(event.context()).dump(sink)
        except ScriptError:
            raise
        except Exception as e:
            raise ScriptError(f"{self.path.name}: {e}") from e

    def _run_shell(self, event: ScriptEvent) -> None:
        script = self.render(event).encode("utf-8")
        try:
            subprocess.run(
                [self._interpreter],
                input=script,
                stdout=_STDERR_FD,
                stderr=_STDERR_FD,
                env={**os.environ, "WEBHOOK": "1"},
                check=True,
            )
        except (OSError, subprocess.CalledProcessError) as e:
            raise self._dump(script, e) from e
        self._log.debug("Template script succeeded", extra={"script": str(self.path)})

    def _dump(self, script: bytes, error: Exception) -> ScriptError:
        """Keep the rendered script around for troubleshooting."""

        try:
            fd, name = tempfile.mkstemp(prefix="webhook-", suffix=".sh", dir=self._dump_dir)
            with os.fdopen(fd, "wb") as f:
                f.write(script)
        except OSError as dump_error:
            return ScriptDumpError(error, dump_error)
        return ScriptError(f"{name}: failed with: {error}")
