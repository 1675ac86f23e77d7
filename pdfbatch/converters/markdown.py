"""Markdown to HTML conversion using Python-Markdown."""

from pathlib import Path

import markdown

from pdfbatch.converters.base import read_source
from pdfbatch.converters.template import render_document, title_from_filename
from pdfbatch.exceptions import ConversionError

# GitHub-flavored behavior: tables, fenced code, hard line breaks, heading ids
MARKDOWN_EXTENSIONS = [
    "extra",
    "sane_lists",
    "nl2br",
    "toc",
]


def markdown_to_html(text: str) -> str:
    """Render Markdown text to an HTML fragment."""
    return markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS, output_format="html")


def convert_markdown(file_path: Path) -> str:
    """Convert a Markdown file into a complete HTML document."""
    text = read_source(file_path)
    try:
        body = markdown_to_html(text)
    except Exception as e:
        raise ConversionError(file_path, f"Markdown parse failed: {e}", cause=e) from e
    return render_document(title_from_filename(file_path), body, file_path)
