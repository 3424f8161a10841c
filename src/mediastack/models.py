from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True, slots=True)
class FileMetadata:
    id: str
    is_folder: bool = False


@dataclass(frozen=True, slots=True)
class FieldMatch:
    """The four fields captured by a stacking expression.

    Each ``*_index`` is the position of the field inside the matched text, or
    -1 when the group did not participate in the match.
    """

    title: str
    volume: str
    ignore: str
    extension: str
    title_index: int = -1
    volume_index: int = -1
    ignore_index: int = -1
    extension_index: int = -1


@dataclass(slots=True)
class FileStack:
    name: str = ""
    expression: str = ""
    is_folder_stack: bool = False
    files: List[str] = field(default_factory=list)

    def contains_file(self, path: str, is_directory: bool) -> bool:
        if self.is_folder_stack != is_directory:
            return False
        lowered = path.casefold()
        return any(member.casefold() == lowered for member in self.files)


@dataclass(slots=True)
class StackResult:
    stacks: List[FileStack] = field(default_factory=list)
    unstacked: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def stacked_files(self) -> List[str]:
        return [path for stack in self.stacks for path in stack.files]


@dataclass(slots=True)
class AudioBookFilePathParserResult:
    part_number: Optional[int] = None
    chapter_number: Optional[int] = None


@dataclass(slots=True)
class AudioBookFileInfo:
    path: str
    container: str
    part_number: Optional[int] = None
    chapter_number: Optional[int] = None
    is_directory: bool = False
