"""Extension based classification of candidate paths."""

from __future__ import annotations

from typing import Optional, Protocol

from .config import NamingOptions
from .models import FileMetadata
from .utils import get_extension, normalize_extensions


class CandidateClassifier(Protocol):
    def is_video_file(self, path: str) -> bool: ...

    def is_stub_file(self, path: str) -> bool: ...


class ExtensionClassifier:
    def __init__(self, options: Optional[NamingOptions] = None) -> None:
        options = options or NamingOptions()
        self._video = frozenset(normalize_extensions(options.video_file_extensions))
        self._stub = frozenset(normalize_extensions(options.stub_file_extensions))
        self._audio = frozenset(normalize_extensions(options.audio_file_extensions))

    def is_video_file(self, path: str) -> bool:
        return get_extension(path).lower() in self._video

    def is_stub_file(self, path: str) -> bool:
        return get_extension(path).lower() in self._stub

    def is_audio_file(self, path: str) -> bool:
        return get_extension(path).lower() in self._audio


def is_stack_candidate(entry: FileMetadata, classifier: CandidateClassifier) -> bool:
    """Folders always participate; files only when playable video or a stub."""
    if entry.is_folder:
        return True
    return classifier.is_video_file(entry.id) or classifier.is_stub_file(entry.id)
