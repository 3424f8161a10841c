"""mediastack core package.

Groups multi-part media files (cd1/cd2, part 1/part 2, disc a/disc b) into
stacks so a library indexer can present them as a single title.

- **stacking**: the stack matching engine and result aggregation
- **regex_provider**: offset-aware evaluation of four-field stacking expressions
- **classifier**: extension based video / stub / audio classification
- **audiobook**: part and chapter extraction for audiobook files
- **config**: naming options and YAML loading
- **validation**: schema and semantic checks for naming option files

The main entry point is ``StackResolver``.
"""

from .audiobook import AudioBookFilePathParser, AudioBookResolver
from .config import NamingOptions, load_options
from .models import FileMetadata, FileStack, StackResult
from .stacking import StackResolver
from .version import __version__

__all__ = [
    "__version__",
    "AudioBookFilePathParser",
    "AudioBookResolver",
    "FileMetadata",
    "FileStack",
    "NamingOptions",
    "StackResolver",
    "StackResult",
    "load_options",
]
