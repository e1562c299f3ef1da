import logging
from pathlib import Path

import pytest

from json_repeaters.blocks.registry import BlockRegistry
from json_repeaters.blocks.types import RepeaterDefinition
from json_repeaters.config import get_settings

SETTINGS_ENV = (
    "APP_ENV",
    "LOG_LEVEL",
    "JSON_REPEATERS",
    "REPEATER_DEFINITIONS_PATH",
    "DYNAMIC_REPEATERS_DIR",
)


@pytest.fixture(autouse=True)
def test_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    for key in SETTINGS_ENV:
        monkeypatch.delenv(key, raising=False)
    # Keep a developer .env out of the settings under test.
    monkeypatch.chdir(tmp_path)
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def registry() -> BlockRegistry:
    return BlockRegistry(
        [
            RepeaterDefinition(
                name="gallery",
                component_type="Gallery",
                title="Gallery item",
                title_field="caption",
            ),
            RepeaterDefinition(
                name="dynamic-repeater-faq",
                component_type="a17-block-faq",
                title="FAQ",
                title_field="question",
                hide_title_prefix=True,
            ),
            RepeaterDefinition(name="slide", component_type="Slide", title="Slide"),
        ]
    )
