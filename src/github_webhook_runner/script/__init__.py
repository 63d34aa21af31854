"""Template scripts driven by webhook events."""

from github_webhook_runner.script.engine import Script, ScriptEvent, ScriptMode, parse_args
from github_webhook_runner.script.funcs import parse_duration

__all__ = ["Script", "ScriptEvent", "ScriptMode", "parse_args", "parse_duration"]
