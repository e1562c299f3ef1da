"""Repeater type registry: definitions keyed by name."""

from __future__ import annotations

import logging
from typing import Protocol

from json_repeaters.blocks.types import RepeaterDefinition

logger = logging.getLogger(__name__)


class TypeRegistry(Protocol):
    def get(self, name: str) -> RepeaterDefinition | None: ...


class BlockRegistry:
    def __init__(self, definitions: list[RepeaterDefinition] | None = None) -> None:
        self._definitions: dict[str, RepeaterDefinition] = {}
        for definition in definitions or []:
            self.register(definition)

    def register(self, definition: RepeaterDefinition) -> None:
        if definition.name in self._definitions:
            logger.warning("Replacing repeater definition: %s", definition.name)
        self._definitions[definition.name] = definition

    def get(self, name: str) -> RepeaterDefinition | None:
        return self._definitions.get(name)

    def all(self) -> list[RepeaterDefinition]:
        return list(self._definitions.values())

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)
