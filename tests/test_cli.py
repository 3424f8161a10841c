from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from mediastack import cli


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch) -> None:
    monkeypatch.setattr("mediastack.cli.configure_logging", lambda *args, **kwargs: None)
    monkeypatch.delenv("MEDIASTACK_CONFIG", raising=False)


@pytest.fixture
def json_output(monkeypatch) -> list:
    captured: list = []

    def mock_print_json(text, **kwargs):
        captured.append(json.loads(text))

    monkeypatch.setattr("mediastack.cli.CONSOLE.print_json", mock_print_json)
    return captured


@pytest.fixture
def console_output(monkeypatch) -> list[str]:
    lines: list[str] = []

    def mock_console_print(message="", **kwargs):
        lines.append(str(message))

    monkeypatch.setattr("mediastack.cli.CONSOLE.print", mock_console_print)
    return lines


def test_stack_json(json_output) -> None:
    exit_code = cli.main(["stack", "movie-cd2.mkv", "movie-cd1.mkv", "notes.txt", "--json"])

    assert exit_code == 0
    payload = json_output[0]
    assert payload["stacks"][0]["name"] == "movie"
    assert payload["stacks"][0]["files"] == ["movie-cd1.mkv", "movie-cd2.mkv"]
    assert payload["stacks"][0]["is_folder_stack"] is False
    assert payload["unstacked"] == []
    assert payload["skipped"] == ["notes.txt"]


def test_stack_folders_and_stdin(json_output, monkeypatch) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("Heat cd1.avi\n\nHeat cd2.avi\n"))

    exit_code = cli.main(["stack", "--stdin", "--folder", "Show Disc 1", "--folder", "Show Disc 2", "--json"])

    assert exit_code == 0
    stacks = json_output[0]["stacks"]
    assert [stack["files"] for stack in stacks] == [
        ["Heat cd1.avi", "Heat cd2.avi"],
        ["Show Disc 1", "Show Disc 2"],
    ]
    assert stacks[1]["is_folder_stack"] is True


def test_stack_uses_config(tmp_path: Path, json_output) -> None:
    config_path = tmp_path / "naming.yaml"
    config_path.write_text(
        "video_file_stacking_expressions:\n  - '(.*?)(#[0-9])(.*?)(\\.[^.]+)$'\n",
        encoding="utf-8",
    )

    exit_code = cli.main(["--config", str(config_path), "stack", "a#1.mkv", "a#2.mkv", "b-cd1.mkv", "b-cd2.mkv", "--json"])

    assert exit_code == 0
    assert [stack["files"] for stack in json_output[0]["stacks"]] == [["a#1.mkv", "a#2.mkv"]]


def test_stack_bad_config(tmp_path: Path) -> None:
    config_path = tmp_path / "naming.yaml"
    config_path.write_text("video_file_extensions: 3\n", encoding="utf-8")

    assert cli.main(["--config", str(config_path), "stack", "a.mkv"]) == 1


def test_stack_config_from_environment(tmp_path: Path, monkeypatch, json_output) -> None:
    config_path = tmp_path / "naming.yaml"
    config_path.write_text("video_file_stacking_expressions: []\n", encoding="utf-8")
    monkeypatch.setenv("MEDIASTACK_CONFIG", str(config_path))

    assert cli.main(["stack", "movie-cd1.mkv", "movie-cd2.mkv", "--json"]) == 0
    assert json_output[0]["stacks"] == []


def test_stack_table_output(monkeypatch) -> None:
    rendered = []

    class DummyRenderer:
        def __init__(self, console) -> None:
            pass

        def render(self, result, *, show_skipped: bool = False) -> None:
            rendered.append((result, show_skipped))

    monkeypatch.setattr("mediastack.cli.StackTableRenderer", DummyRenderer)

    assert cli.main(["stack", "movie-cd1.mkv", "movie-cd2.mkv", "--show-skipped"]) == 0
    result, show_skipped = rendered[0]
    assert len(result.stacks) == 1
    assert show_skipped is True


def test_audiobook_json(json_output) -> None:
    exit_code = cli.main(["audiobook", "Chapter 3.mp3", "cover.jpg", "--json"])

    assert exit_code == 0
    payload = json_output[0]
    assert payload[0] == {"path": "Chapter 3.mp3", "container": "mp3", "part_number": 3, "chapter_number": 3}
    assert payload[1]["container"] is None


def test_audiobook_blank_path() -> None:
    assert cli.main(["audiobook", " "]) == 1


class TestValidateConfig:
    def test_valid(self, tmp_path: Path, console_output) -> None:
        config_path = tmp_path / "naming.yaml"
        config_path.write_text("naming:\n  extra_video_file_extensions: [.mk3d]\n", encoding="utf-8")

        assert cli.main(["validate-config", str(config_path)]) == 0
        assert any("passed validation" in line for line in console_output)

    def test_invalid(self, tmp_path: Path, console_output) -> None:
        config_path = tmp_path / "naming.yaml"
        config_path.write_text("video_file_stacking_expressions: ['(a)(b)']\n", encoding="utf-8")

        assert cli.main(["validate-config", str(config_path)]) == 1
        assert not any("passed validation" in line for line in console_output)

    def test_uses_global_config(self, tmp_path: Path, console_output) -> None:
        config_path = tmp_path / "naming.yaml"
        config_path.write_text("{}\n", encoding="utf-8")

        assert cli.main(["--config", str(config_path), "validate-config"]) == 0

    def test_missing_path(self, console_output) -> None:
        assert cli.main(["validate-config"]) == 1
        assert any("No configuration file" in line for line in console_output)

    def test_unreadable_file(self, tmp_path: Path, console_output) -> None:
        assert cli.main(["validate-config", str(tmp_path / "missing.yaml")]) == 1

    def test_invalid_yaml(self, tmp_path: Path, console_output) -> None:
        config_path = tmp_path / "naming.yaml"
        config_path.write_text("naming: [\n", encoding="utf-8")

        assert cli.main(["validate-config", str(config_path)]) == 1
        assert any("Invalid YAML" in line for line in console_output)


def test_command_is_required() -> None:
    with pytest.raises(SystemExit):
        cli.main([])
