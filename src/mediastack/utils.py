from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import yaml


# Boolean true/false string values
_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})

PATH_SEPARATORS = re.compile(r"[\\/]")


class InvalidArgumentError(ValueError):
    """Raised when a single path argument is empty or whitespace."""


def require_path(path: Optional[str], name: str = "path") -> str:
    if path is None or not str(path).strip():
        raise InvalidArgumentError(f"'{name}' must be a non-empty path")
    return path


def file_name(path: str) -> str:
    """Return the last component of a path using either separator style."""
    return PATH_SEPARATORS.split(path)[-1]


def get_extension(path: str) -> str:
    """Return the extension of ``path`` including the leading dot, or ``""``."""
    name = file_name(path)
    index = name.rfind(".")
    if index == -1 or index == len(name) - 1:
        return ""
    return name[index:]


def file_name_without_extension(path: str) -> str:
    name = file_name(path)
    extension = get_extension(name)
    return name[: len(name) - len(extension)] if extension else name


def normalize_extension(value: str) -> str:
    cleaned = value.strip().lower()
    if cleaned and not cleaned.startswith("."):
        cleaned = "." + cleaned
    return cleaned


def normalize_extensions(values: Iterable[str]) -> List[str]:
    seen: List[str] = []
    for value in values:
        extension = normalize_extension(value)
        if extension and extension not in seen:
            seen.append(extension)
    return seen


def expand_env(value: Any) -> Any:
    if isinstance(value, str):
        return os.path.expandvars(value)
    if isinstance(value, list):
        return [expand_env(item) for item in value]
    if isinstance(value, dict):
        return {key: expand_env(val) for key, val in value.items()}
    return value


def load_yaml_file(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    return expand_env(data)


def parse_env_bool(value: Optional[str]) -> Optional[bool]:
    """Parse a boolean from an environment variable string.

    Returns None if value is None or not a recognized boolean string.
    """
    if value is None:
        return None
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    return None


def env_bool(name: str) -> Optional[bool]:
    return parse_env_bool(os.getenv(name))
