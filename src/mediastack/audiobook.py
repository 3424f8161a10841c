"""Part and chapter extraction for audiobook files."""

from __future__ import annotations

import logging
import re
from typing import Optional

from .classifier import ExtensionClassifier
from .config import NamingOptions
from .models import AudioBookFileInfo, AudioBookFilePathParserResult
from .regex_provider import RegexProvider
from .utils import file_name_without_extension, get_extension, require_path

LOGGER = logging.getLogger(__name__)


def _group_int(match: re.Match[str], name: str) -> Optional[int]:
    if name not in match.re.groupindex:
        return None
    value = match.group(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


class AudioBookFilePathParser:
    """Runs every parts expression over the file name; first hit per field wins."""

    def __init__(self, options: Optional[NamingOptions] = None, provider: Optional[RegexProvider] = None) -> None:
        self.options = options or NamingOptions()
        self.provider = provider or RegexProvider()

    def parse(self, path: str) -> AudioBookFilePathParserResult:
        require_path(path)
        name = file_name_without_extension(path)
        result = AudioBookFilePathParserResult()

        for expression in self.options.audiobook_parts_expressions:
            regex = self.provider.get_regex(expression, re.IGNORECASE)
            if regex is None:
                continue
            match = regex.search(name)
            if match is None:
                continue
            if result.chapter_number is None:
                result.chapter_number = _group_int(match, "chapter")
            if result.part_number is None:
                result.part_number = _group_int(match, "part")
            if result.chapter_number is not None and result.part_number is not None:
                break

        return result


class AudioBookResolver:
    def __init__(self, options: Optional[NamingOptions] = None, provider: Optional[RegexProvider] = None) -> None:
        self.options = options or NamingOptions()
        self.provider = provider or RegexProvider()
        self.classifier = ExtensionClassifier(self.options)

    def parse_file(self, path: str) -> Optional[AudioBookFileInfo]:
        return self.resolve(path, is_directory=False)

    def parse_directory(self, path: str) -> Optional[AudioBookFileInfo]:
        return self.resolve(path, is_directory=True)

    def resolve(self, path: str, is_directory: bool = False) -> Optional[AudioBookFileInfo]:
        """Describe a single audiobook file.

        Returns None for directories and for files whose extension is not a
        supported audio extension.

        Raises:
            InvalidArgumentError: If ``path`` is empty or whitespace.
        """
        require_path(path)
        if is_directory:
            return None

        if not self.classifier.is_audio_file(path):
            LOGGER.debug("Skipping %s: unsupported audio extension", path)
            return None

        parsed = AudioBookFilePathParser(self.options, self.provider).parse(path)
        return AudioBookFileInfo(
            path=path,
            container=get_extension(path).lstrip("."),
            part_number=parsed.part_number,
            chapter_number=parsed.chapter_number,
            is_directory=is_directory,
        )
