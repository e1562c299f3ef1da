"""Repeater type definitions."""

from dataclasses import dataclass
from typing import Any

# Self-contained repeaters are registered under this prefix.
DYNAMIC_REPEATER_PREFIX = "dynamic-repeater-"


@dataclass(slots=True, frozen=True)
class RepeaterDefinition:
    name: str
    component_type: str
    title: str = ""
    title_field: str | None = None
    hide_title_prefix: bool = False

    def to_metadata(self, item_id: Any) -> dict[str, Any]:
        """Render the per-item metadata entry the form layer expects."""
        return {
            "id": item_id,
            "type": self.component_type,
            "title": self.title,
            "titleField": self.title_field,
            "hideTitlePrefix": self.hide_title_prefix,
        }
