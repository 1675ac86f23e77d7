"""Source formats and the content converter contract."""

from collections.abc import Callable
from enum import Enum
from pathlib import Path

from pdfbatch.config.constants import SUPPORTED_EXTENSIONS
from pdfbatch.exceptions import ConversionError


class SourceFormat(str, Enum):
    """Closed set of source formats that can be turned into HTML."""

    MARKDOWN = "markdown"
    TEXT = "text"
    HTML = "html"

    @classmethod
    def from_extension(cls, extension: str) -> "SourceFormat | None":
        """Look up the format for an extension such as ``.md``."""
        name = SUPPORTED_EXTENSIONS.get(extension.lower())
        return cls(name) if name else None


# A content converter reads one file and returns a complete HTML document
ContentConverter = Callable[[Path], str]


def read_source(file_path: Path) -> str:
    """Read a source file as UTF-8 text.

    Raises:
        ConversionError: If the file cannot be read or decoded
    """
    try:
        return file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConversionError(file_path, f"Cannot read file: {e}", cause=e) from e
