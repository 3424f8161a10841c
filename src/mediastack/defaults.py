"""Built-in naming options.

Stacking expressions must capture exactly four ordered groups:
``(title)(volume)(ignore)(extension)``. Order matters; the first expression
able to form a stack for a given anchor wins.
"""

from __future__ import annotations

# Extension appended to folder names so that expressions expecting an
# extension group still match them.
FOLDER_MATCH_EXTENSION = ".mkv"

VIDEO_FILE_EXTENSIONS: tuple[str, ...] = (
    ".m4v",
    ".3gp",
    ".nsv",
    ".ts",
    ".ty",
    ".strm",
    ".rm",
    ".rmvb",
    ".ifo",
    ".mov",
    ".qt",
    ".divx",
    ".xvid",
    ".bivx",
    ".vob",
    ".nrg",
    ".img",
    ".iso",
    ".pva",
    ".wmv",
    ".asf",
    ".asx",
    ".ogm",
    ".m2v",
    ".avi",
    ".bin",
    ".dvr-ms",
    ".mpg",
    ".mpeg",
    ".mp4",
    ".mkv",
    ".avc",
    ".vp3",
    ".svq3",
    ".nuv",
    ".viv",
    ".dv",
    ".fli",
    ".flv",
    ".001",
    ".tp",
    ".webm",
    ".m2ts",
    ".mts",
    ".ogv",
)

STUB_FILE_EXTENSIONS: tuple[str, ...] = (".disc",)

AUDIO_FILE_EXTENSIONS: tuple[str, ...] = (
    ".aac",
    ".ac3",
    ".aif",
    ".aiff",
    ".ape",
    ".dsf",
    ".dts",
    ".flac",
    ".m4a",
    ".m4b",
    ".mka",
    ".mp2",
    ".mp3",
    ".mpc",
    ".oga",
    ".ogg",
    ".opus",
    ".wav",
    ".wma",
    ".wv",
)

VIDEO_FILE_STACKING_EXPRESSIONS: tuple[str, ...] = (
    # movie-cd1.mkv, movie part 2.avi, movie.disc03.mp4
    r"(.*?)([ _.-]*(?:cd|dvd|p(?:ar)?t|dis[ck]|d)[ _.-]*[0-9]+)(.*?)(\.[^.]+)$",
    # movie-cda.mkv, movie.disc b.avi
    r"(.*?)([ _.-]*(?:cd|dvd|p(?:ar)?t|dis[ck]|d)[ _.-]*[a-d])(.*?)(\.[^.]+)$",
    # movie-a.mkv, movie-b.mkv
    r"(.*?)([ ._-]*[a-d])(.*?)(\.[^.]+)$",
)

AUDIOBOOK_PARTS_EXPRESSIONS: tuple[str, ...] = (
    # Chapter 01, ch 3
    r"ch(?:apter)?[\s_-]?(?P<chapter>[0-9]+)",
    # Part 02, pt 4
    r"p(?:ar)?t[\s_-]?(?P<part>[0-9]+)",
    # leading number is usually the chapter
    r"^(?P<chapter>[0-9]+)",
    # trailing number is usually the part
    r"(?P<part>[0-9]+)$",
    # 0001_005 (chapter_part)
    r"(?P<chapter>[0-9]+)_(?P<part>[0-9]+)",
    # cd rips: CD1-1
    r"(?P<chapter>[0-9]+)-(?P<part>[0-9]+)",
)
