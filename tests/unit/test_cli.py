import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from json_repeaters.cli import cli
from json_repeaters.repeaters.media_keys import encode


@pytest.fixture
def configured(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    definitions = tmp_path / "repeaters.json"
    definitions.write_text(
        json.dumps({"gallery": {"component": "Gallery", "titleField": "caption"}}),
        encoding="utf-8",
    )
    monkeypatch.setenv("JSON_REPEATERS", '["gallery", "faq"]')
    monkeypatch.setenv("REPEATER_DEFINITIONS_PATH", str(definitions))
    return tmp_path


def _payload(tmp_path: Path, data: dict) -> str:
    path = tmp_path / "payload.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_names(configured: Path) -> None:
    result = CliRunner().invoke(cli, ["--log-level", "WARNING", "names"])
    assert result.exit_code == 0
    assert result.stdout.split() == ["gallery", "faq"]


def test_prepare_save_lifts_media(configured: Path) -> None:
    payload = _payload(
        configured, {"repeaters": {"gallery": [{"medias": {"cover": [{"id": 7}]}}]}}
    )
    result = CliRunner().invoke(cli, ["--log-level", "WARNING", "prepare", payload])
    assert result.exit_code == 0
    output = json.loads(result.stdout)
    assert output["medias"] == {encode("cover", "gallery", 0): [{"id": 7}]}


def test_prepare_create_copies_only(configured: Path) -> None:
    payload = _payload(
        configured, {"repeaters": {"gallery": [{"medias": {"cover": [{"id": 7}]}}]}}
    )
    result = CliRunner().invoke(cli, ["--log-level", "WARNING", "prepare", "--create", payload])
    assert result.exit_code == 0
    output = json.loads(result.stdout)
    assert "medias" not in output
    assert output["gallery"] == [{"medias": {"cover": [{"id": 7}]}}]


def test_form_fields(configured: Path) -> None:
    payload = _payload(configured, {"gallery": [{"caption": "A"}], "faq": [{"question": "Q"}]})
    result = CliRunner().invoke(cli, ["--log-level", "WARNING", "form-fields", payload])
    assert result.exit_code == 0
    output = json.loads(result.stdout)
    assert output["repeaterFields"] == {"gallery": [{"name": "blocks[0][caption]", "value": "A"}]}
    assert "faq" not in output["repeaters"]


def test_invalid_payload(configured: Path) -> None:
    path = configured / "payload.json"
    path.write_text("[1, 2]", encoding="utf-8")
    result = CliRunner().invoke(cli, ["--log-level", "WARNING", "form-fields", str(path)])
    assert result.exit_code == 2
    assert "payload must be a JSON object" in result.output


def test_configuration_error_exits_2(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JSON_REPEATERS", '{"0": "gallery", "x": 1}')
    result = CliRunner().invoke(cli, ["--log-level", "WARNING", "names"])
    assert result.exit_code == 2
    assert "configuration error" in result.output


def test_types_lists_registered_definitions(configured: Path) -> None:
    result = CliRunner().invoke(cli, ["--log-level", "WARNING", "types"])
    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["gallery\tGallery\tcaption"]


def test_types_reports_broken_definitions(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    broken = tmp_path / "repeaters.json"
    broken.write_text("{not json", encoding="utf-8")
    monkeypatch.setenv("REPEATER_DEFINITIONS_PATH", str(broken))
    result = CliRunner().invoke(cli, ["--log-level", "WARNING", "types"])
    assert result.exit_code == 2
    assert "invalid JSON" in result.output
