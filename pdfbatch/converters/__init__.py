"""Content converters: normalize source files into HTML documents."""

from pathlib import Path

from pdfbatch.converters.base import ContentConverter, SourceFormat, read_source
from pdfbatch.converters.html import convert_html
from pdfbatch.converters.markdown import convert_markdown, markdown_to_html
from pdfbatch.converters.template import render_document, title_from_filename
from pdfbatch.converters.text import convert_text, text_to_html
from pdfbatch.exceptions import ConverterNotFoundError

CONVERTERS: dict[SourceFormat, ContentConverter] = {
    SourceFormat.MARKDOWN: convert_markdown,
    SourceFormat.TEXT: convert_text,
    SourceFormat.HTML: convert_html,
}


def get_converter(fmt: SourceFormat) -> ContentConverter:
    """Return the converter for a source format."""
    return CONVERTERS[fmt]


def convert_to_html(file_path: Path, fmt: SourceFormat | None = None) -> str:
    """Convert a source file to a complete HTML document.

    Args:
        file_path: Source file
        fmt: Source format (default: derived from the file extension)

    Returns:
        HTML document string

    Raises:
        ConverterNotFoundError: If the extension has no converter
        ConversionError: If the file cannot be read or parsed
    """
    if fmt is None:
        fmt = SourceFormat.from_extension(file_path.suffix)
        if fmt is None:
            raise ConverterNotFoundError(file_path, file_path.suffix.lower())
    return get_converter(fmt)(file_path)


__all__ = [
    "CONVERTERS",
    "ContentConverter",
    "SourceFormat",
    "convert_html",
    "convert_markdown",
    "convert_text",
    "convert_to_html",
    "get_converter",
    "markdown_to_html",
    "read_source",
    "render_document",
    "text_to_html",
    "title_from_filename",
]
