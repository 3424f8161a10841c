from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from . import defaults
from .utils import load_yaml_file, normalize_extensions


class ConfigError(ValueError):
    """Raised when a naming options file cannot be loaded."""


@dataclass
class NamingOptions:
    video_file_extensions: list[str] = field(default_factory=lambda: list(defaults.VIDEO_FILE_EXTENSIONS))
    stub_file_extensions: list[str] = field(default_factory=lambda: list(defaults.STUB_FILE_EXTENSIONS))
    audio_file_extensions: list[str] = field(default_factory=lambda: list(defaults.AUDIO_FILE_EXTENSIONS))
    video_file_stacking_expressions: list[str] = field(
        default_factory=lambda: list(defaults.VIDEO_FILE_STACKING_EXPRESSIONS)
    )
    audiobook_parts_expressions: list[str] = field(
        default_factory=lambda: list(defaults.AUDIOBOOK_PARTS_EXPRESSIONS)
    )
    folder_match_extension: str = defaults.FOLDER_MATCH_EXTENSION


_EXTENSION_FIELDS = (
    "video_file_extensions",
    "stub_file_extensions",
    "audio_file_extensions",
)
_EXPRESSION_FIELDS = (
    "video_file_stacking_expressions",
    "audiobook_parts_expressions",
)


def _ensure_string_list(value: Any, *, field_name: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, Iterable) or isinstance(value, (bytes, dict)):
        raise ValueError(f"'{field_name}' must be provided as a list of strings")
    result: list[str] = []
    for index, entry in enumerate(value):
        if not isinstance(entry, str):
            raise ValueError(f"'{field_name}[{index}]' must be a string")
        result.append(entry)
    return result


def _merge_list(base: list[str], data: dict[str, Any], field_name: str) -> list[str]:
    """Resolve ``field_name`` (replace) and ``extra_<field_name>`` (extend) against ``base``."""
    merged = list(base)
    if field_name in data:
        merged = _ensure_string_list(data[field_name], field_name=field_name)
    extra_name = f"extra_{field_name}"
    if extra_name in data:
        merged.extend(_ensure_string_list(data[extra_name], field_name=extra_name))
    return merged


def build_options(data: dict[str, Any] | None) -> NamingOptions:
    """Build ``NamingOptions`` from a parsed mapping, falling back to the built-ins."""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("Naming options must be provided as a mapping")

    section = data.get("naming", data)
    if not isinstance(section, dict):
        raise ValueError("'naming' must be provided as a mapping when specified")

    options = NamingOptions()
    for field_name in _EXTENSION_FIELDS:
        merged = _merge_list(getattr(options, field_name), section, field_name)
        setattr(options, field_name, normalize_extensions(merged))

    for field_name in _EXPRESSION_FIELDS:
        merged = _merge_list(getattr(options, field_name), section, field_name)
        # Priority order is significant; only drop exact duplicates.
        setattr(options, field_name, list(dict.fromkeys(merged)))

    folder_extension = section.get("folder_match_extension")
    if folder_extension is not None:
        if not isinstance(folder_extension, str) or not folder_extension.strip():
            raise ValueError("'folder_match_extension' must be a non-empty string")
        options.folder_match_extension = normalize_extensions([folder_extension])[0]

    return options


def load_options(path: Path | None) -> NamingOptions:
    """Load naming options from a YAML file; ``None`` yields the built-in defaults."""
    if path is None:
        return NamingOptions()
    try:
        data = load_yaml_file(path)
    except OSError as exc:
        raise ConfigError(f"Unable to read naming options from {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    try:
        return build_options(data)
    except ValueError as exc:
        raise ConfigError(f"{path}: {exc}") from exc
