"""Repeater definition loading from JSON files on disk."""

import json
import logging
from pathlib import Path
from typing import Any

from json_repeaters.blocks.registry import BlockRegistry
from json_repeaters.blocks.types import DYNAMIC_REPEATER_PREFIX, RepeaterDefinition
from json_repeaters.config import Settings
from json_repeaters.errors import RegistryError

logger = logging.getLogger(__name__)

DEFAULT_COMPONENT_PREFIX = "a17-block-"


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise RegistryError(f"cannot read repeater definitions: {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise RegistryError(f"invalid JSON in repeater definitions: {path}: {exc}") from exc


def parse_definition(name: str, raw: Any, source: Path | None = None) -> RepeaterDefinition:
    """Build a RepeaterDefinition from its config form.

    Accepts ``component`` or ``componentType``; a missing component falls back
    to the form layer's ``a17-block-<name>`` naming.
    """
    where = f" ({source})" if source is not None else ""
    if not isinstance(raw, dict):
        raise RegistryError(f"repeater definition {name!r} must be an object{where}")
    name = raw.get("name") or name
    if not isinstance(name, str) or not name:
        raise RegistryError(f"repeater definition without a name{where}")
    component = raw.get("component") or raw.get("componentType") or DEFAULT_COMPONENT_PREFIX + name
    title_field = raw.get("titleField")
    return RepeaterDefinition(
        name=name,
        component_type=str(component),
        title=str(raw.get("title") or ""),
        title_field=str(title_field) if title_field else None,
        hide_title_prefix=bool(raw.get("hideTitlePrefix", False)),
    )


def load_definitions(path: Path) -> list[RepeaterDefinition]:
    """Load definitions from a JSON list of objects or a ``name -> object`` mapping."""
    data = _read_json(path)
    if isinstance(data, dict):
        return [parse_definition(name, raw, path) for name, raw in data.items()]
    if isinstance(data, list):
        return [parse_definition("", raw, path) for raw in data]
    raise RegistryError(f"repeater definitions must be a list or an object: {path}")


def load_dynamic_repeaters(directory: Path) -> list[RepeaterDefinition]:
    """Load self-contained repeaters, one ``*.json`` file each.

    A file that does not name itself is registered as
    ``dynamic-repeater-<file stem>``.
    """
    if not directory.is_dir():
        logger.warning("Dynamic repeaters directory not found: %s", directory)
        return []
    definitions: list[RepeaterDefinition] = []
    for candidate in sorted(directory.glob("*.json")):
        definitions.append(
            parse_definition(DYNAMIC_REPEATER_PREFIX + candidate.stem, _read_json(candidate), candidate)
        )
    return definitions


def build_registry(settings: Settings) -> BlockRegistry:
    registry = BlockRegistry()
    if settings.repeater_definitions_path:
        for definition in load_definitions(Path(settings.repeater_definitions_path)):
            registry.register(definition)
    if settings.dynamic_repeaters_dir:
        for definition in load_dynamic_repeaters(Path(settings.dynamic_repeaters_dir)):
            registry.register(definition)
    logger.debug("Loaded %d repeater definitions", len(registry))
    return registry
