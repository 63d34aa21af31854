"""Capability resolution: which handler method receives which event.

A receiver object advertises its capabilities through method signatures:

    class Notifier:
        def push(self, payload: PushEvent) -> None: ...        # specific handler
        def webhook(self, event: str, payload: Any) -> None: ... # wildcard handler

A specific handler takes exactly one argument annotated with a schema known to
the registry; the event it handles is the registry name of that schema. The
wildcard handler takes the event name and the payload, each either unannotated
or loosely typed (`str`; `Any`, `object`, `BaseModel` or `Payload`). The method
names themselves do not matter.

Resolution happens once, at construction. Duplicate claims are configuration
errors. The resulting `RoutingTable` is immutable and safe to read from any
number of dispatch threads.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel

from github_webhook_runner.webhook.errors import ConfigError
from github_webhook_runner.webhook.payloads import Payload
from github_webhook_runner.webhook.registry import DEFAULT_REGISTRY, WILDCARD, PayloadRegistry

logger = logging.getLogger(__name__)

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
_EVENT_NAME = (inspect.Parameter.empty, str)
_UNTYPED = (inspect.Parameter.empty, Any, object, BaseModel, Payload)


@dataclass(frozen=True, slots=True)
class Route:
    """A resolved invocation target."""

    target: Callable[..., object]
    wildcard: bool = False

    @property
    def name(self) -> str:
        return getattr(self.target, "__qualname__", repr(self.target))

    def invoke(self, event: str, payload: BaseModel) -> object:
        if self.wildcard:
            return self.target(event, payload)
        return self.target(payload)


class RoutingTable:
    """Immutable mapping from event name (or `*`) to a `Route`."""

    def __init__(self, routes: Mapping[str, Route]) -> None:
        self._routes: Mapping[str, Route] = MappingProxyType(dict(routes))

    @classmethod
    def build(
        cls,
        *,
        specific: Mapping[str, Callable[[Any], object]] | None = None,
        wildcard: Callable[[str, Any], object] | None = None,
        registry: PayloadRegistry = DEFAULT_REGISTRY,
    ) -> RoutingTable:
        """Explicit registration, for callers that prefer it over introspection."""

        routes: dict[str, Route] = {}
        for event, target in (specific or {}).items():
            if event not in registry:
                raise ConfigError(f"cannot register a handler for unknown event {event!r}")
            routes[event] = Route(target=target)
        if wildcard is not None:
            routes[WILDCARD] = Route(target=wildcard, wildcard=True)
        return cls(routes)

    def lookup(self, event: str) -> Route | None:
        """Specific handler if present, else the wildcard handler, else None."""

        route = self._routes.get(event)
        if route is not None:
            return route
        return self._routes.get(WILDCARD)

    def events(self) -> list[str]:
        return sorted(self._routes)

    def __contains__(self, event: object) -> bool:
        return event in self._routes

    def __len__(self) -> int:
        return len(self._routes)

    def __repr__(self) -> str:
        routes = ", ".join(f"{k}={v.name}" for k, v in sorted(self._routes.items()))
        return f"RoutingTable({routes})"


def _positional_params(method: Callable[..., object]) -> list[inspect.Parameter] | None:
    try:
        sig = inspect.signature(method, eval_str=True)
    except (NameError, TypeError, ValueError) as e:
        logger.debug("Skipping method with unresolvable signature", extra={"error": str(e)})
        return None
    params = list(sig.parameters.values())
    if any(p.kind not in _POSITIONAL for p in params):
        return None
    return params


def resolve_capabilities(
    receiver: object, registry: PayloadRegistry = DEFAULT_REGISTRY
) -> RoutingTable:
    """Inspect `receiver`'s public methods and build its routing table.

    Raises:
        ConfigError: more than one method handles the same event, or more than
            one wildcard method exists.
    """

    routes: dict[str, Route] = {}
    for attr, _ in inspect.getmembers(type(receiver), inspect.isfunction):
        if attr.startswith("_"):
            continue
        method = getattr(receiver, attr)
        params = _positional_params(method)
        if params is None:
            logger.debug("Method takes wrong kind of arguments", extra={"method": attr})
            continue

        if len(params) == 1:
            annotation = params[0].annotation
            event = (
                registry.name_for(annotation)
                if isinstance(annotation, type) and issubclass(annotation, BaseModel)
                else None
            )
            if event is None:
                logger.debug(
                    "Method takes wrong type of event",
                    extra={"method": attr, "annotation": repr(annotation)},
                )
                continue
            if event in routes:
                raise ConfigError(
                    f"there is more than one method handling {event!r} event: "
                    f"{routes[event].name}, {method.__qualname__}"
                )
            routes[event] = Route(target=method)

        elif len(params) == 2:
            name_type, payload_type = params[0].annotation, params[1].annotation
            if name_type not in _EVENT_NAME or payload_type not in _UNTYPED:
                logger.debug(
                    "Wildcard method takes wrong types of arguments", extra={"method": attr}
                )
                continue
            if WILDCARD in routes:
                raise ConfigError(
                    "there is more than one method handling all events: "
                    f"{routes[WILDCARD].name}, {method.__qualname__}"
                )
            routes[WILDCARD] = Route(target=method, wildcard=True)

        else:
            logger.debug(
                "Method takes wrong number of arguments",
                extra={"method": attr, "count": len(params)},
            )

    return RoutingTable(routes)
