from __future__ import annotations

from pathlib import Path

import pytest

from mediastack.config import ConfigError, NamingOptions, build_options, load_options
from mediastack.defaults import VIDEO_FILE_EXTENSIONS, VIDEO_FILE_STACKING_EXPRESSIONS


def test_defaults() -> None:
    options = build_options({})

    assert options == NamingOptions()
    assert options.video_file_stacking_expressions == list(VIDEO_FILE_STACKING_EXPRESSIONS)
    assert options.folder_match_extension == ".mkv"


def test_none_yields_defaults() -> None:
    assert build_options(None) == NamingOptions()


def test_extra_extensions_extend_and_normalize() -> None:
    options = build_options({"extra_video_file_extensions": ["MK3D", ".mkv", " .Foo "]})

    assert options.video_file_extensions[: len(VIDEO_FILE_EXTENSIONS)] == list(VIDEO_FILE_EXTENSIONS)
    assert options.video_file_extensions[-2:] == [".mk3d", ".foo"]
    assert options.video_file_extensions.count(".mkv") == 1


def test_replacing_expressions_keeps_order() -> None:
    expressions = [r"(b)(b)(b)(b)", r"(a)(a)(a)(a)", r"(b)(b)(b)(b)"]
    options = build_options({"video_file_stacking_expressions": expressions})

    assert options.video_file_stacking_expressions == [r"(b)(b)(b)(b)", r"(a)(a)(a)(a)"]


def test_naming_section() -> None:
    options = build_options({"naming": {"stub_file_extensions": ["disc", "stub"]}})

    assert options.stub_file_extensions == [".disc", ".stub"]


def test_single_string_is_accepted_as_list() -> None:
    options = build_options({"audio_file_extensions": "mp3"})

    assert options.audio_file_extensions == [".mp3"]


@pytest.mark.parametrize(
    ("data", "message"),
    [
        ({"video_file_extensions": 5}, "'video_file_extensions' must be provided as a list"),
        ({"video_file_extensions": [".mkv", 3]}, "'video_file_extensions[1]' must be a string"),
        ({"extra_audiobook_parts_expressions": {"a": 1}}, "'extra_audiobook_parts_expressions'"),
        ({"naming": ["x"]}, "'naming' must be provided as a mapping"),
        ({"folder_match_extension": ""}, "'folder_match_extension'"),
    ],
)
def test_invalid_values(data, message: str) -> None:
    with pytest.raises(ValueError) as excinfo:
        build_options(data)
    assert message in str(excinfo.value)


def test_non_mapping_document() -> None:
    with pytest.raises(ValueError):
        build_options(["a"])  # type: ignore[arg-type]


class TestLoadOptions:
    def test_none_path(self) -> None:
        assert load_options(None) == NamingOptions()

    def test_load_yaml(self, tmp_path: Path) -> None:
        config_path = tmp_path / "naming.yaml"
        config_path.write_text(
            """
naming:
  video_file_stacking_expressions:
    - '(.*?)([ _.-]*cd[0-9]+)(.*?)(\\.[^.]+)$'
  extra_video_file_extensions: [.mk3d]
""",
            encoding="utf-8",
        )

        options = load_options(config_path)

        assert options.video_file_stacking_expressions == [r"(.*?)([ _.-]*cd[0-9]+)(.*?)(\.[^.]+)$"]
        assert ".mk3d" in options.video_file_extensions

    def test_environment_variables_are_expanded(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.setenv("MEDIASTACK_TEST_EXT", ".avi")
        config_path = tmp_path / "naming.yaml"
        config_path.write_text("folder_match_extension: $MEDIASTACK_TEST_EXT\n", encoding="utf-8")

        assert load_options(config_path).folder_match_extension == ".avi"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Unable to read"):
            load_options(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        config_path = tmp_path / "naming.yaml"
        config_path.write_text("naming: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_options(config_path)

    def test_invalid_value_mentions_path(self, tmp_path: Path) -> None:
        config_path = tmp_path / "naming.yaml"
        config_path.write_text("video_file_extensions: 3\n", encoding="utf-8")

        with pytest.raises(ConfigError) as excinfo:
            load_options(config_path)
        assert str(config_path) in str(excinfo.value)
