from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from jsonschema import Draft7Validator

from .regex_provider import FIELD_COUNT

_STRING_LIST = {"type": "array", "items": {"type": "string"}}

_NAMING_PROPERTIES: Dict[str, Any] = {
    "video_file_extensions": _STRING_LIST,
    "stub_file_extensions": _STRING_LIST,
    "audio_file_extensions": _STRING_LIST,
    "video_file_stacking_expressions": _STRING_LIST,
    "audiobook_parts_expressions": _STRING_LIST,
    "extra_video_file_extensions": _STRING_LIST,
    "extra_stub_file_extensions": _STRING_LIST,
    "extra_audio_file_extensions": _STRING_LIST,
    "extra_video_file_stacking_expressions": _STRING_LIST,
    "extra_audiobook_parts_expressions": _STRING_LIST,
    "folder_match_extension": {"type": "string", "minLength": 1},
}

CONFIG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "naming": {
            "type": "object",
            "properties": _NAMING_PROPERTIES,
            "additionalProperties": False,
        },
        **_NAMING_PROPERTIES,
    },
    "additionalProperties": False,
}

_STACKING_FIELDS = ("video_file_stacking_expressions", "extra_video_file_stacking_expressions")
_AUDIOBOOK_FIELDS = ("audiobook_parts_expressions", "extra_audiobook_parts_expressions")


@dataclass(slots=True)
class ValidationIssue:
    """Represents a single validation problem."""

    severity: str
    path: str
    message: str
    code: str


@dataclass(slots=True)
class ValidationReport:
    """Aggregates validation warnings and errors."""

    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def error(self, path: str, message: str, code: str) -> None:
        self.errors.append(ValidationIssue(severity="error", path=path, message=message, code=code))

    def warning(self, path: str, message: str, code: str) -> None:
        self.warnings.append(ValidationIssue(severity="warning", path=path, message=message, code=code))


def _format_jsonschema_path(path: Sequence[Any]) -> str:
    if not path:
        return "<root>"
    tokens: List[str] = []
    for part in path:
        if isinstance(part, int):
            if tokens:
                tokens[-1] = f"{tokens[-1]}[{part}]"
            else:
                tokens.append(f"[{part}]")
        else:
            tokens.append(str(part))
    return ".".join(tokens)


def _compile(expression: str) -> tuple[Optional[re.Pattern[str]], Optional[str]]:
    try:
        return re.compile(expression, re.IGNORECASE), None
    except re.error as exc:
        return None, str(exc)


def validate_config_data(data: Any) -> ValidationReport:
    """Validate a naming options document against the schema and semantic rules."""
    report = ValidationReport()
    if data is None:
        return report

    validator = Draft7Validator(CONFIG_SCHEMA)
    for error in sorted(validator.iter_errors(data), key=lambda exc: _format_jsonschema_path(exc.absolute_path)):
        report.error(_format_jsonschema_path(error.absolute_path), error.message, "schema")

    if not report.is_valid or not isinstance(data, dict):
        return report

    if isinstance(data.get("naming"), dict):
        _validate_semantics(data["naming"], "naming.", report)
    _validate_semantics(data, "", report)
    return report


def _validate_semantics(section: Dict[str, Any], prefix: str, report: ValidationReport) -> None:
    for field_name in _STACKING_FIELDS:
        seen: Dict[str, int] = {}
        for index, expression in enumerate(section.get(field_name) or []):
            path = f"{prefix}{field_name}[{index}]"
            if expression in seen:
                report.warning(path, f"Duplicate expression also defined at index {seen[expression]}", "duplicate")
                continue
            seen[expression] = index
            regex, problem = _compile(expression)
            if regex is None:
                report.error(path, f"Invalid regular expression: {problem}", "regex")
            elif regex.groups < FIELD_COUNT:
                report.error(
                    path,
                    f"Stacking expressions need {FIELD_COUNT} capture groups "
                    f"(title, volume, ignore, extension); found {regex.groups}",
                    "group-count",
                )

    for field_name in _AUDIOBOOK_FIELDS:
        for index, expression in enumerate(section.get(field_name) or []):
            path = f"{prefix}{field_name}[{index}]"
            regex, problem = _compile(expression)
            if regex is None:
                report.error(path, f"Invalid regular expression: {problem}", "regex")
            elif not {"part", "chapter"} & set(regex.groupindex):
                report.warning(path, "Expression captures neither a 'part' nor a 'chapter' group", "named-groups")
