"""Structural mapping between nested JSON repeaters and flattened form fields.

Inbound, the nested ``repeaters`` payload submitted by the form is copied to
top-level fields so persistence stores each repeater as a plain JSON array,
and (on save) every item's media is lifted into the flat ``medias`` mapping
under a key encoding role, repeater and item position.

Outbound, a stored repeater array is flattened into the four collections the
form layer reads: per-item metadata, ``blocks[<id>][<field>]`` inputs,
browser selections and media.

None of the operations mutate the payload they are given.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from json_repeaters.blocks.types import RepeaterDefinition
from json_repeaters.logging import log_context
from json_repeaters.repeaters.declaration import RepeaterNameDeclaration, resolve_repeater_names
from json_repeaters.repeaters.media_keys import get_json_repeater_media_role
from json_repeaters.repeaters.type_resolver import RepeaterTypeResolver

logger = logging.getLogger(__name__)

# Item keys that never become scalar form fields.
RESERVED_ITEM_KEYS = frozenset({"id", "repeaters", "files", "medias", "browsers", "blocks"})

Payload = dict[str, Any]


def block_field_key(item_id: Any, name: str) -> str:
    return f"blocks[{item_id}][{name}]"


def _pairs(value: Any) -> Iterable[tuple[Any, Any]]:
    # JSON arrays stand in for maps keyed by position.
    if isinstance(value, Mapping):
        return value.items()
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return enumerate(value)
    return ()


def _submitted_repeaters(fields: Mapping[str, Any]) -> Mapping[str, Any]:
    submitted = fields.get("repeaters")
    return submitted if isinstance(submitted, Mapping) else {}


class StructuralMapper:
    def __init__(
        self,
        declaration: RepeaterNameDeclaration,
        type_resolver: RepeaterTypeResolver,
    ) -> None:
        self._declaration = declaration
        self._type_resolver = type_resolver

    @property
    def repeater_names(self) -> list[str]:
        return resolve_repeater_names(self._declaration)

    def prepare_fields_before_create(self, fields: Payload) -> Payload:
        """Copy each submitted repeater array to its top-level field.

        Media is left alone: there is no record to associate it with yet.
        """
        submitted = _submitted_repeaters(fields)
        result = dict(fields)
        for name in self.repeater_names:
            items = submitted.get(name)
            if items is not None:
                result[name] = items
        return result

    def prepare_fields_before_save(self, fields: Payload) -> Payload:
        """Copy submitted repeater arrays and lift item media into ``medias``."""
        submitted = _submitted_repeaters(fields)
        result = dict(fields)
        lifted: dict[str, Any] = {}
        for name in self.repeater_names:
            items = submitted.get(name)
            if items is None:
                continue
            result[name] = items
            for index, item in enumerate(items):
                if not isinstance(item, Mapping) or not item.get("medias"):
                    continue
                for role, medias in _pairs(item["medias"]):
                    lifted[get_json_repeater_media_role(str(role), name, index)] = medias
        if lifted:
            medias_field = fields.get("medias")
            merged = dict(medias_field) if isinstance(medias_field, Mapping) else {}
            merged.update(lifted)
            result["medias"] = merged
        return result

    def get_form_fields(self, fields: Payload) -> Payload:
        """Flatten every declared repeater that has stored items."""
        for name in self.repeater_names:
            stored = fields.get(name)
            if stored:
                fields = self.get_json_repeater(fields, name, stored)
        return fields

    def get_json_repeater(
        self,
        fields: Payload,
        repeater_name: str,
        serialized_data: Sequence[Mapping[str, Any]],
    ) -> Payload:
        """Flatten one stored repeater array into the form-layer collections.

        If the repeater's type cannot be resolved the payload is returned
        unchanged: stored content outliving its type definition is expected.
        """
        with log_context(repeater=repeater_name, items=len(serialized_data)):
            return self._flatten(fields, repeater_name, serialized_data)

    def _flatten(
        self,
        fields: Payload,
        repeater_name: str,
        serialized_data: Sequence[Mapping[str, Any]],
    ) -> Payload:
        metadata: list[dict[str, Any]] = []
        repeater_fields: list[dict[str, Any]] = []
        repeater_browsers: dict[str, Any] = {}
        repeater_medias: dict[str, Any] = {}

        stored_medias = fields.get("medias")
        if not isinstance(stored_medias, Mapping):
            stored_medias = {}

        definition: RepeaterDefinition | None = None
        for index, item in enumerate(serialized_data):
            item_id = item.get("id")
            if item_id is None:
                item_id = index

            if definition is None:
                definition = self._type_resolver.resolve(repeater_name)
                if definition is None:
                    logger.info("No repeater type registered, leaving stored items untouched")
                    return fields

            metadata.append(definition.to_metadata(item_id))

            for picker_key, selection in _pairs(item.get("browsers")):
                repeater_browsers[block_field_key(item_id, picker_key)] = selection

            for field_name, value in item.items():
                if field_name in RESERVED_ITEM_KEYS:
                    continue
                repeater_fields.append({"name": block_field_key(item_id, field_name), "value": value})

            for role, _ in _pairs(item.get("medias")):
                key = get_json_repeater_media_role(str(role), repeater_name, index)
                value = stored_medias.get(key)
                if value is None:
                    logger.debug("No media stored for role %s at index %d", role, index)
                    continue
                repeater_medias[block_field_key(item_id, role)] = value

        result = dict(fields)
        for collection, value in (
            ("repeaters", metadata),
            ("repeaterFields", repeater_fields),
            ("repeaterBrowsers", repeater_browsers),
            ("repeaterMedias", repeater_medias),
        ):
            existing = result.get(collection)
            by_name = dict(existing) if isinstance(existing, Mapping) else {}
            by_name[repeater_name] = value
            result[collection] = by_name
        return result
