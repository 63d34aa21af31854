"""Hand-off of verified events to handler code, after the response is sent.

The HTTP side never waits for, nor learns about, what happens here. Failures
are logged and dropped.

`ThreadDispatcher` starts one daemon thread per event. There is no bound on
in-flight threads, no draining on shutdown and no way to cancel a running
handler; a hung handler blocks only its own thread. Swap in another
`Dispatcher` to change any of that.
"""

from __future__ import annotations

import itertools
import logging
import threading
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)


class Dispatcher(Protocol):
    """Runs `fn(*args)` at some point after `submit` returns."""

    def submit(self, fn: Callable[..., object], /, *args: object) -> None: ...


def _run_logged(fn: Callable[..., object], args: tuple[object, ...]) -> None:
    try:
        fn(*args)
    except Exception:
        logger.exception(
            "Dispatch failed", extra={"target": getattr(fn, "__qualname__", repr(fn))}
        )


class ThreadDispatcher:
    """Fire-and-forget: one daemon thread per submission."""

    def __init__(self, name: str = "webhook-dispatch") -> None:
        self._name = name
        self._counter = itertools.count(1)

    def submit(self, fn: Callable[..., object], /, *args: object) -> None:
        thread = threading.Thread(
            target=_run_logged,
            name=f"{self._name}-{next(self._counter)}",
            daemon=True,
            args=(fn, args),
        )
        thread.start()


class InlineDispatcher:
    """Runs submissions synchronously in the caller's thread."""

    def submit(self, fn: Callable[..., object], /, *args: object) -> None:
        _run_logged(fn, args)
