"""Field matching for stacking expressions.

A stacking expression is a regular expression with four ordered capture
groups: title, volume, ignorable suffix and extension. ``RegexFieldMatcher``
evaluates one expression against one file name starting at a character
offset. Anything else implementing ``FieldMatcher`` can be plugged into the
stack resolver instead.
"""

from __future__ import annotations

import functools
import logging
import re
from typing import Optional, Protocol

from .logging_utils import render_fields_block
from .models import FieldMatch, FileMetadata
from .utils import file_name

LOGGER = logging.getLogger(__name__)

FIELD_COUNT = 4


class FieldMatcher(Protocol):
    def match(self, expression: str, text: str, offset: int) -> Optional[FieldMatch]: ...


class RegexProvider:
    """Compiles and caches expressions.

    Compilation failures are cached as ``None`` so a broken expression is
    reported once and then simply never matches.
    """

    def __init__(self, maxsize: int = 256) -> None:
        self._compile = functools.lru_cache(maxsize=maxsize)(self._compile_uncached)

    def get_regex(self, expression: str, flags: int = re.IGNORECASE) -> Optional[re.Pattern[str]]:
        return self._compile(expression, flags)

    @staticmethod
    def _compile_uncached(expression: str, flags: int) -> Optional[re.Pattern[str]]:
        try:
            return re.compile(expression, flags)
        except re.error as exc:
            LOGGER.warning(
                render_fields_block(
                    "Invalid Expression",
                    {"Expression": expression, "Error": exc},
                    pad_top=True,
                )
            )
            return None


class RegexFieldMatcher:
    def __init__(self, provider: Optional[RegexProvider] = None) -> None:
        self.provider = provider or RegexProvider()
        self._field_regex = functools.lru_cache(maxsize=256)(self._lookup_field_regex)

    def _lookup_field_regex(self, expression: str) -> Optional[re.Pattern[str]]:
        regex = self.provider.get_regex(expression, re.IGNORECASE)
        if regex is None or regex.groups >= FIELD_COUNT:
            return regex
        LOGGER.warning(
            render_fields_block(
                "Invalid Expression",
                {
                    "Expression": expression,
                    "Error": f"captures {regex.groups} group(s), expected {FIELD_COUNT}",
                },
                pad_top=True,
            )
        )
        return None

    def match(self, expression: str, text: str, offset: int) -> Optional[FieldMatch]:
        if offset < 0 or offset >= len(text):
            return None

        regex = self._field_regex(expression)
        if regex is None:
            return None

        found = regex.search(text, offset)
        if found is None:
            return None

        values = [found.group(index) or "" for index in range(1, FIELD_COUNT + 1)]
        positions = [found.start(index) for index in range(1, FIELD_COUNT + 1)]
        return FieldMatch(
            title=values[0],
            volume=values[1],
            ignore=values[2],
            extension=values[3],
            title_index=positions[0],
            volume_index=positions[1],
            ignore_index=positions[2],
            extension_index=positions[3],
        )


def get_match_input(entry: FileMetadata, folder_extension: str = ".mkv") -> str:
    """Return the file name an expression is evaluated against.

    Folder ids get ``folder_extension`` appended so expressions that expect an
    extension group still match.
    """
    if not entry.is_folder:
        return file_name(entry.id)
    return file_name(entry.id.rstrip("\\/") + folder_extension)
