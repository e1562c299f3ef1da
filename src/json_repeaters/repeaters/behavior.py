"""JSON repeater support for content repositories.

Repositories that store simple repeaters in a JSON column, instead of a
dedicated table, hold a ``JsonRepeaters`` instance and call it from their
create, save and form-field hooks.

Supported item content: scalar inputs, browsers, and media roles lifted into
the record's ``medias`` field. Nested repeaters and files are not supported.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from json_repeaters.blocks.loader import build_registry
from json_repeaters.blocks.registry import TypeRegistry
from json_repeaters.config import Settings, get_settings, load_declaration
from json_repeaters.repeaters.declaration import (
    AliasMap,
    PlainList,
    RepeaterNameDeclaration,
    parse_declaration,
)
from json_repeaters.repeaters.mapper import Payload, StructuralMapper
from json_repeaters.repeaters.type_resolver import RepeaterTypeResolver


@runtime_checkable
class SupportsJsonRepeaters(Protocol):
    def prepare_fields_before_create(self, fields: Payload) -> Payload: ...

    def prepare_fields_before_save(self, obj: Any, fields: Payload) -> Payload: ...

    def get_form_fields(self, obj: Any, fields: Payload) -> Payload: ...

    def get_json_repeater(
        self,
        fields: Payload,
        repeater_name: str,
        serialized_data: Sequence[Mapping[str, Any]],
    ) -> Payload: ...


class JsonRepeaters:
    """SupportsJsonRepeaters by composition: delegates to a StructuralMapper."""

    def __init__(
        self,
        declaration: RepeaterNameDeclaration | list[str] | dict[Any, str],
        registry: TypeRegistry,
    ) -> None:
        if not isinstance(declaration, (PlainList, AliasMap)):
            declaration = parse_declaration(declaration)
        self.declaration = declaration
        self.mapper = StructuralMapper(declaration, RepeaterTypeResolver(registry, declaration))

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> JsonRepeaters:
        settings = settings or get_settings()
        return cls(load_declaration(settings), build_registry(settings))

    @property
    def repeater_names(self) -> list[str]:
        return self.mapper.repeater_names

    def prepare_fields_before_create(self, fields: Payload) -> Payload:
        return self.mapper.prepare_fields_before_create(fields)

    def prepare_fields_before_save(self, obj: Any, fields: Payload) -> Payload:
        return self.mapper.prepare_fields_before_save(fields)

    def get_form_fields(self, obj: Any, fields: Payload) -> Payload:
        return self.mapper.get_form_fields(fields)

    def get_json_repeater(
        self,
        fields: Payload,
        repeater_name: str,
        serialized_data: Sequence[Mapping[str, Any]],
    ) -> Payload:
        return self.mapper.get_json_repeater(fields, repeater_name, serialized_data)
