"""Composite keys tying a media role to a repeater item position.

The key is only meaningful inside a payload's flat ``medias`` mapping: it is
written during save-time normalization and re-derived when flattening for the
form. Components are escaped so distinct (role, repeater, index) triples can
never produce the same key.
"""

from json_repeaters.errors import MediaRoleKeyError

SEPARATOR = "|"

_ESCAPES = (("%", "%25"), (SEPARATOR, "%7C"))


def _escape(component: str) -> str:
    for raw, escaped in _ESCAPES:
        component = component.replace(raw, escaped)
    return component


def _unescape(component: str) -> str:
    for raw, escaped in reversed(_ESCAPES):
        component = component.replace(escaped, raw)
    return component


def encode(role: str, repeater_name: str, index: int) -> str:
    return SEPARATOR.join((_escape(repeater_name), str(index), _escape(role)))


def decode(key: str) -> tuple[str, str, int]:
    """Split a key back into ``(role, repeater_name, index)``."""
    parts = key.split(SEPARATOR)
    if len(parts) != 3:
        raise MediaRoleKeyError(f"malformed media role key: {key!r}")
    repeater_name, raw_index, role = parts
    if not (raw_index.isascii() and raw_index.isdigit()):
        raise MediaRoleKeyError(f"malformed item index in media role key: {key!r}")
    return _unescape(role), _unescape(repeater_name), int(raw_index)


def get_json_repeater_media_role(role: str, repeater_name: str, index: int) -> str:
    return encode(role, repeater_name, index)
