"""Store simple repeaters as JSON and map them to and from form fields."""

from json_repeaters.blocks.registry import BlockRegistry, TypeRegistry
from json_repeaters.blocks.types import RepeaterDefinition
from json_repeaters.repeaters.behavior import JsonRepeaters, SupportsJsonRepeaters
from json_repeaters.repeaters.declaration import AliasMap, PlainList, parse_declaration
from json_repeaters.repeaters.mapper import StructuralMapper
from json_repeaters.repeaters.type_resolver import RepeaterTypeResolver

__all__ = [
    "AliasMap",
    "BlockRegistry",
    "JsonRepeaters",
    "PlainList",
    "RepeaterDefinition",
    "RepeaterTypeResolver",
    "StructuralMapper",
    "SupportsJsonRepeaters",
    "TypeRegistry",
    "parse_declaration",
]
