"""Bidirectional lookup between event names and payload schemas."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from pydantic import BaseModel

from github_webhook_runner.webhook.errors import ConfigError
from github_webhook_runner.webhook.payloads import PAYLOAD_TYPES

WILDCARD = "*"


class PayloadRegistry:
    """Read-only `name <-> schema` table.

    Both directions must be unique: no two event names share a schema and no
    name maps to two schemas. The table is built once and never mutated.
    """

    def __init__(self, types: Mapping[str, type[BaseModel]]) -> None:
        by_name: dict[str, type[BaseModel]] = {}
        by_type: dict[type[BaseModel], str] = {}
        for name, model in types.items():
            if not name or name == WILDCARD:
                raise ConfigError(f"invalid event name: {name!r}")
            if not (isinstance(model, type) and issubclass(model, BaseModel)):
                raise ConfigError(f"event {name!r} maps to a non-model type: {model!r}")
            if model in by_type:
                raise ConfigError(
                    f"events {by_type[model]!r} and {name!r} share the schema {model.__name__}"
                )
            by_name[name] = model
            by_type[model] = name
        self._by_name = MappingProxyType(by_name)
        self._by_type = MappingProxyType(by_type)

    def type_for(self, name: str) -> type[BaseModel] | None:
        return self._by_name.get(name)

    def name_for(self, model: type[BaseModel]) -> str | None:
        return self._by_type.get(model)

    def names(self) -> list[str]:
        return sorted(self._by_name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[str]:
        return iter(self._by_name)

    def __len__(self) -> int:
        return len(self._by_name)


DEFAULT_REGISTRY = PayloadRegistry(PAYLOAD_TYPES)
