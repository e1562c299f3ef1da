"""Repeater type lookup with the direct / dynamic / alias fallback chain."""

from json_repeaters.blocks.registry import TypeRegistry
from json_repeaters.blocks.types import DYNAMIC_REPEATER_PREFIX, RepeaterDefinition
from json_repeaters.repeaters.declaration import PlainList, RepeaterNameDeclaration


class RepeaterTypeResolver:
    def __init__(
        self,
        registry: TypeRegistry,
        declaration: RepeaterNameDeclaration | None = None,
    ) -> None:
        self._registry = registry
        self._declaration = declaration if declaration is not None else PlainList()

    def resolve(self, name: str, alias_target: str | None = None) -> RepeaterDefinition | None:
        """Return the definition for ``name`` or None when the data is orphaned.

        First match wins: the exact name, then ``dynamic-repeater-<name>``, then
        the alias target (given explicitly or taken from the declaration).
        """
        definition = self._registry.get(name)
        if definition is not None:
            return definition
        definition = self._registry.get(DYNAMIC_REPEATER_PREFIX + name)
        if definition is not None:
            return definition
        if alias_target is None:
            alias_target = self._declaration.alias_for(name)
        if alias_target is None:
            return None
        return self._registry.get(alias_target)
