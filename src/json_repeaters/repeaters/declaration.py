"""Repeater-name declarations: which top-level fields hold JSON repeaters."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from json_repeaters.errors import DeclarationError


@dataclass(slots=True, frozen=True)
class PlainList:
    """Ordered repeater names, each also being its own type name."""

    entries: tuple[str, ...] = ()

    def names(self) -> list[str]:
        return list(self.entries)

    def alias_for(self, name: str) -> str | None:
        return None


@dataclass(slots=True, frozen=True)
class AliasMap:
    """Ordered public keys mapped to the repeater type they reuse."""

    entries: tuple[tuple[str, str], ...] = ()

    def names(self) -> list[str]:
        return [public_key for public_key, _ in self.entries]

    def alias_for(self, name: str) -> str | None:
        for public_key, underlying in self.entries:
            if public_key == name:
                return underlying
        return None


RepeaterNameDeclaration = PlainList | AliasMap


def _require_names(values: Sequence[Any]) -> tuple[str, ...]:
    names: list[str] = []
    for value in values:
        if not isinstance(value, str):
            raise DeclarationError(f"repeater name must be a string, got {value!r}")
        names.append(value)
    return tuple(names)


def _is_positional(key: Any) -> bool:
    # JSON object keys are always text, so "0", "1", ... are list positions too.
    if isinstance(key, bool):
        return False
    if isinstance(key, int):
        return True
    return isinstance(key, str) and key.isascii() and key.isdigit()


def parse_declaration(raw: Any) -> RepeaterNameDeclaration:
    """Decide the declaration variant once, at configuration-load time.

    ``raw`` may be JSON text (the JSON_REPEATERS form) or already decoded.
    A list of names is a PlainList. A mapping is a PlainList of its values
    when every key is a position (an int or a digit string), and an AliasMap
    when every key is a non-numeric string. Mixed keys are rejected. Blank,
    empty or missing declarations yield a PlainList with no names.
    """
    if isinstance(raw, str):
        if not raw.strip():
            return PlainList()
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise DeclarationError(f"declaration is not valid JSON: {exc}") from exc

    if raw is None:
        return PlainList()

    if isinstance(raw, (list, tuple)):
        return PlainList(_require_names(raw))

    if isinstance(raw, Mapping):
        if not raw:
            return PlainList()
        keys = list(raw.keys())
        if all(_is_positional(key) for key in keys):
            return PlainList(_require_names(list(raw.values())))
        if all(isinstance(key, str) and not _is_positional(key) for key in keys):
            entries: list[tuple[str, str]] = []
            for public_key, underlying in raw.items():
                if not isinstance(underlying, str):
                    raise DeclarationError(
                        f"alias target for {public_key!r} must be a string, got {underlying!r}"
                    )
                entries.append((public_key, underlying))
            return AliasMap(tuple(entries))
        raise DeclarationError(
            "declaration mixes named and positional keys: "
            + ", ".join(repr(key) for key in keys)
        )

    raise DeclarationError(f"unsupported declaration type: {type(raw).__name__}")


def resolve_repeater_names(declaration: RepeaterNameDeclaration) -> list[str]:
    """Return the ordered repeater names a declaration asks us to process."""
    return declaration.names()
